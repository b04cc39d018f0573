"""Tests for virtual environment management and installation."""
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from src.genenv.environment import (
    PackageInstaller,
    PipInstaller,
    VirtualEnvironment,
    read_version_pin,
    venv_bin_dir,
)
from src.genenv.genenv_types import GenEnvError, RuntimeVersionUnavailable


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_read_version_pin(temp_dir):
    (temp_dir / "version").write_text("3.11\n")
    assert read_version_pin(temp_dir) == "3.11"


def test_read_version_pin_missing_or_blank(temp_dir):
    assert read_version_pin(temp_dir) is None
    (temp_dir / "version").write_text("  \n")
    assert read_version_pin(temp_dir) is None


def test_venv_bin_dir():
    assert venv_bin_dir(Path(".venv"), windows=True) == Path(".venv/Scripts")
    assert venv_bin_dir(Path(".venv"), windows=False) == Path(".venv/bin")


def test_ensure_reuses_existing_environment(temp_dir):
    (temp_dir / ".venv").mkdir()
    env = VirtualEnvironment(temp_dir)

    with patch('src.genenv.environment.run_command') as mock_run:
        assert env.ensure() is False
    mock_run.assert_not_called()


def test_ensure_creates_with_current_interpreter(temp_dir):
    env = VirtualEnvironment(temp_dir)

    with patch('src.genenv.environment.run_command', return_value=completed()) as mock_run:
        assert env.ensure() is True

    cmd = mock_run.call_args[0][0]
    assert cmd == [sys.executable, "-m", "venv", str(temp_dir / ".venv")]


def test_ensure_uses_pinned_version(temp_dir):
    (temp_dir / "version").write_text("3.11")
    env = VirtualEnvironment(temp_dir)

    with patch('src.genenv.environment.shutil.which', return_value="/usr/bin/python3.11") as mock_which, \
         patch('src.genenv.environment.run_command', return_value=completed()) as mock_run:
        env.ensure()

    mock_which.assert_called_once_with("python3.11")
    assert mock_run.call_args[0][0][0] == "/usr/bin/python3.11"


def test_ensure_missing_pinned_version(temp_dir):
    (temp_dir / "version").write_text("2.9")
    env = VirtualEnvironment(temp_dir)

    with patch('src.genenv.environment.shutil.which', return_value=None), \
         patch('src.genenv.environment.run_command') as mock_run:
        with pytest.raises(RuntimeVersionUnavailable) as exc_info:
            env.ensure()

    mock_run.assert_not_called()
    assert exc_info.value.version == "2.9"
    assert str(exc_info.value) == "Python 2.9 not found. Please install it."
    assert isinstance(exc_info.value, GenEnvError)


def test_ensure_venv_failure(temp_dir):
    env = VirtualEnvironment(temp_dir)
    with patch('src.genenv.environment.run_command', return_value=completed(1, stderr="boom")):
        with pytest.raises(subprocess.CalledProcessError):
            env.ensure()


def test_custom_venv_dir(temp_dir):
    env = VirtualEnvironment(temp_dir, venv_dir="env")
    assert env.path == temp_dir / "env"
    assert env.python_path.parent.parent == temp_dir / "env"


def test_freeze(temp_dir):
    env = VirtualEnvironment(temp_dir)
    output = "numpy==1.26.0\n\nrequests==2.31.0\n"
    with patch('src.genenv.environment.run_command', return_value=completed(stdout=output)) as mock_run:
        assert env.freeze() == ["numpy==1.26.0", "requests==2.31.0"]
    assert mock_run.call_args[0][0][1:] == ["-m", "pip", "freeze"]


def test_freeze_failures_give_empty_list(temp_dir):
    env = VirtualEnvironment(temp_dir)
    with patch('src.genenv.environment.run_command', return_value=completed(1)):
        assert env.freeze() == []
    with patch('src.genenv.environment.run_command', side_effect=FileNotFoundError("no python")):
        assert env.freeze() == []


def test_pip_installer_success():
    installer = PipInstaller("/venv/bin/python")
    with patch('src.genenv.environment.run_command', return_value=completed()) as mock_run:
        assert installer.install("numpy") is True
    assert mock_run.call_args[0][0] == ["/venv/bin/python", "-m", "pip", "install", "numpy"]


def test_pip_installer_failure():
    installer = PipInstaller("/venv/bin/python")
    with patch('src.genenv.environment.run_command', return_value=completed(1, stderr="No matching distribution")):
        assert installer.install("not-a-package") is False
    with patch('src.genenv.environment.run_command', side_effect=OSError("missing")):
        assert installer.install("numpy") is False


def test_pip_installer_satisfies_protocol():
    assert isinstance(PipInstaller("python"), PackageInstaller)
