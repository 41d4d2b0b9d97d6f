"""Checks that a directory is a project root."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeAlias

from hhserver.config import DEFAULT_CONFIG_NAME
from hhserver.exceptions import InvalidRootError

RootValidator: TypeAlias = Callable[[Path], None]


def assert_www_directory(root: Path) -> None:
    if not root.is_dir():
        raise InvalidRootError(
            f"{root} does not exist or is not a directory", root=root
        )
    if not (root / DEFAULT_CONFIG_NAME).is_file():
        raise InvalidRootError(
            f"could not find {DEFAULT_CONFIG_NAME} in {root}",
            root=root,
        )
