"""Startup options for the server.

``parse_options`` is the single entry point that turns a command line into
``ServerOptions``. Every failure is fatal: the resolved value is only ever
produced complete, and nothing downstream may see a partial one.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, NoReturn, Sequence, TextIO

from hhserver.config import (
    ConfigReader,
    RawConfig,
    config_assume_php,
    load_config,
    make_gc_tuning,
    parse_config_file,
)
from hhserver.exceptions import EXIT_MISSING_ROOT
from hhserver.flags import PROVENANCE_FLAGS, parse_flags
from hhserver.gc_tuning import WORKER_GC_BASELINE, GcTuning
from hhserver.startup_action import (
    FileReader,
    StartupAction,
    read_file,
    string_of_init_type,
)
from hhserver.wwwroot import RootValidator, assert_www_directory

logger = logging.getLogger(__name__)

MISSING_ROOT_MESSAGE = "You must specify a root directory!"


@dataclass(frozen=True)
class ServerOptions:
    check_mode: bool
    json_mode: bool
    root: Path
    should_detach: bool
    convert: Path | None
    startup_action: StartupAction | None
    version: bool
    start_time: float
    # Applies to worker processes only. Workers are short-lived and run with
    # a looser profile than the main process.
    gc_tuning: GcTuning
    assume_php: bool
    debug: bool = False

    @property
    def init_type(self) -> str:
        return string_of_init_type(self.startup_action)


def mk_path(raw: str) -> Path:
    return Path(raw).expanduser().resolve()


def resolve_check_mode(*, check: bool, json_mode: bool, convert: object | None) -> bool:
    # --json and --convert both imply --check.
    return check or json_mode or convert is not None


def _root_token(flags: argparse.Namespace) -> str | None:
    tokens = flags.root or []
    if not tokens:
        return None
    if len(tokens) > 1:
        logger.debug("multiple root arguments %s; using %s", tokens, tokens[-1])
    return tokens[-1] or None


def _exit_missing_root(stderr: TextIO | None) -> NoReturn:
    print(MISSING_ROOT_MESSAGE, file=stderr or sys.stderr)
    raise SystemExit(EXIT_MISSING_ROOT)


def _assemble(
    flags: argparse.Namespace,
    *,
    root: Path,
    config: RawConfig,
    gc_baseline: GcTuning,
) -> ServerOptions:
    convert = mk_path(flags.convert) if flags.convert is not None else None
    return ServerOptions(
        check_mode=resolve_check_mode(
            check=flags.check,
            json_mode=flags.json_mode,
            convert=convert,
        ),
        json_mode=flags.json_mode,
        root=root,
        should_detach=flags.should_detach,
        convert=convert,
        startup_action=flags.startup_action,
        version=flags.version,
        start_time=flags.start_time,
        gc_tuning=make_gc_tuning(config, gc_baseline),
        assume_php=config_assume_php(config),
        debug=flags.debug,
    )


def parse_options(
    argv: Sequence[str] | None = None,
    *,
    gc_baseline: GcTuning = WORKER_GC_BASELINE,
    validate_root: RootValidator = assert_www_directory,
    read_config: ConfigReader = parse_config_file,
    read: FileReader = read_file,
    clock: Callable[[], float] = time.time,
    stderr: TextIO | None = None,
) -> ServerOptions:
    """Resolve startup options from ``argv`` (defaults to ``sys.argv[1:]``).

    Without a root argument this writes a diagnostic to ``stderr`` and exits
    with status 2. Invalid ``--load`` arguments, unreadable files, an invalid
    root and malformed config values raise and are not handled here.
    """
    if argv is None:
        argv = sys.argv[1:]
    flags = parse_flags(argv, read=read, clock=clock)
    provenance = [name for name in PROVENANCE_FLAGS if getattr(flags, name)]
    if provenance:
        logger.debug("invoked with %s", ", ".join(provenance))
    token = _root_token(flags)
    if token is None:
        _exit_missing_root(stderr)
    root = mk_path(token)
    validate_root(root)
    config = load_config(root, reader=read_config)
    options = _assemble(flags, root=root, config=config, gc_baseline=gc_baseline)
    logger.debug(
        "resolved options for %s: init=%s check_mode=%s json_mode=%s",
        options.root,
        options.init_type,
        options.check_mode,
        options.json_mode,
    )
    return options


def default_options(
    root: str | Path,
    *,
    gc_baseline: GcTuning = WORKER_GC_BASELINE,
    clock: Callable[[], float] = time.time,
) -> ServerOptions:
    """Options for ``root`` with everything else at its default, for tests."""
    return ServerOptions(
        check_mode=False,
        json_mode=False,
        root=mk_path(str(root)),
        should_detach=False,
        convert=None,
        startup_action=None,
        version=False,
        start_time=clock(),
        gc_tuning=gc_baseline,
        assume_php=True,
    )


def check_mode(options: ServerOptions) -> bool:
    return options.check_mode


def json_mode(options: ServerOptions) -> bool:
    return options.json_mode


def root(options: ServerOptions) -> Path:
    return options.root


def should_detach(options: ServerOptions) -> bool:
    return options.should_detach


def convert(options: ServerOptions) -> Path | None:
    return options.convert


def startup_action(options: ServerOptions) -> StartupAction | None:
    return options.startup_action


def version(options: ServerOptions) -> bool:
    return options.version


def start_time(options: ServerOptions) -> float:
    return options.start_time


def gc_tuning(options: ServerOptions) -> GcTuning:
    return options.gc_tuning


def assume_php(options: ServerOptions) -> bool:
    return options.assume_php
