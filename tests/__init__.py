"""Test suite package configuration.

This module ensures that the repository root is available on ``sys.path`` when
running the test suite. When :mod:`pytest` is invoked through its console
script the project root is not always importable, so ``import mediastacks``
would fail for an uninstalled checkout.
"""

from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT: Path = Path(__file__).resolve().parent.parent


def _ensure_repo_on_path() -> None:
    """Insert the repository root into ``sys.path`` when it is missing.

    ``insert`` rather than ``append`` keeps the working tree ahead of any
    installed copy of the package.
    """

    repo_root_str: str = str(_REPO_ROOT)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_on_path()
