"""Common test fixtures."""
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def make_project(temp_dir):
    """Write a project tree from a mapping of relative path to source."""
    def _make(files):
        for rel_path, content in files.items():
            path = temp_dir / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip(), encoding='utf-8')
        return temp_dir
    return _make


@pytest.fixture
def sample_project(make_project):
    """Create a small project with local, stdlib and third-party imports."""
    return make_project({
        "main.py": """
            import os
            import sys
            import numpy as np
            from PIL import Image
            import utils
            from app.core import engine
            from . import sibling
        """,
        "utils.py": """
            import json
            import requests
        """,
        "app/__init__.py": "",
        "app/core/__init__.py": "",
        "app/core/engine.py": """
            from ..helpers import tool
            import rembg
        """,
        "scripts/tool.py": """
            import yaml
        """,
        "broken.py": """
            def broken(:
                import should_not_appear
        """,
        ".venv/lib/site.py": """
            import venv_only_package
        """,
    })
