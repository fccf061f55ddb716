# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Domain purity: domain modules import only stdlib math/time helpers, numpy and syzygy."""
import ast
from pathlib import Path

import pytest

DOMAIN_ROOT = Path(__file__).resolve().parent.parent / "src" / "syzygy" / "domain"

ALLOWED = {
    'math', 'numpy', 'dataclasses', 'typing', 'enum', '__future__', 'datetime', 'logging',
}


def _domain_modules():
    return sorted(DOMAIN_ROOT.glob("*.py"))


def test_domain_modules_found():
    assert len(_domain_modules()) >= 10


@pytest.mark.parametrize("path", _domain_modules(), ids=lambda p: p.name)
def test_domain_module_pure(path):
    tree = ast.parse(path.read_text(encoding="utf-8"))

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                root = alias.name.split('.')[0]
                assert root in ALLOWED or root == 'syzygy', f"Disallowed import '{alias.name}'"
        if isinstance(node, ast.ImportFrom):
            if node.module and node.level == 0:
                root = node.module.split('.')[0]
                assert root in ALLOWED or root == 'syzygy', f"Disallowed import from '{node.module}'"


@pytest.mark.parametrize("path", _domain_modules(), ids=lambda p: p.name)
def test_domain_does_not_import_adapters(path):
    tree = ast.parse(path.read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            assert not node.module.startswith(('syzygy.adapters', 'syzygy.cli')), node.module
