"""Persisted-state startup actions selected by ``--save`` and ``--load``."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeAlias

from hhserver.exceptions import LoadArgumentError

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Fresh:
    """Start without persisted state."""


@dataclass(frozen=True)
class Load:
    state_file: str
    to_recheck: tuple[str, ...] = ()


@dataclass(frozen=True)
class Save:
    state_file: str


StartupAction: TypeAlias = Fresh | Load | Save
FileReader: TypeAlias = Callable[[str], str]

FRESH = Fresh()


def read_file(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def split_lines(text: str) -> tuple[str, ...]:
    # Runs of newlines never produce empty entries.
    return tuple(line for line in text.split("\n") if line)


def parse_save(path: str) -> Save:
    return Save(state_file=path)


def parse_load(spec: str, *, read: FileReader = read_file) -> Load:
    """Parse the ``--load`` argument.

    ``spec`` is "STATE_FILE [RECHECK_LIST]". When a recheck list is named,
    its lines are the files to re-analyze after the state is loaded. Errors
    raised by ``read`` propagate unchanged.
    """
    tokens = [token for token in _WHITESPACE_RE.split(spec) if token]
    if not tokens:
        raise LoadArgumentError("--load needs at least one argument", spec=spec)
    if len(tokens) > 2:
        raise LoadArgumentError("--load takes at most 2 arguments", spec=spec)
    if len(tokens) == 1:
        return Load(state_file=tokens[0])
    state_file, recheck_list = tokens
    to_recheck = split_lines(read(recheck_list))
    logger.debug(
        "loaded recheck list %s (%d files)", recheck_list, len(to_recheck)
    )
    return Load(state_file=state_file, to_recheck=to_recheck)


def string_of_init_type(action: StartupAction | None) -> str:
    if isinstance(action, Load):
        return "load"
    if isinstance(action, Save):
        return "save"
    return "fresh"
