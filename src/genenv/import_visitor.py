"""AST visitor for collecting import information."""
import ast
from typing import List

from .genenv_types import ImportInfo


class ImportVisitor(ast.NodeVisitor):
    """AST visitor for collecting import statements."""

    def __init__(self):
        self.imports: List[ImportInfo] = []

    def visit_Import(self, node: ast.Import) -> None:
        """Visit Import node."""
        for name in node.names:
            self.imports.append(ImportInfo(
                name=name.name,
                alias=name.asname,
                is_relative=False,
                lineno=node.lineno
            ))
        self.generic_visit(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        """Visit ImportFrom node.

        Only the module part is recorded; the imported names are attributes
        or submodules of it. ``from . import x`` has no module and is kept
        as a bare relative marker.
        """
        module = ('.' * node.level) + (node.module or '')
        self.imports.append(ImportInfo(
            name=module,
            alias=None,
            is_relative=node.level > 0,
            lineno=node.lineno
        ))
        self.generic_visit(node)

