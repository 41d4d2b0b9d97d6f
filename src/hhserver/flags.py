"""Command-line flags accepted by the server.

The ``--json`` output is parsed by editor and lint integrations. Do not change
its name or meaning in an incompatible way.
"""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from hhserver.startup_action import FileReader, parse_load, parse_save, read_file

PROG = "hh_server"
USAGE = "%(prog)s [options] [WWW DIRECTORY]"


class Messages:
    debug = "debugging mode"
    check = "check and exit"
    json = "output errors in json format (arc lint mode)"
    daemon = "detach process"
    from_vim = "passed from hh_client"
    from_emacs = "passed from hh_client"
    from_hhclient = "passed from hh_client"
    convert = "adds type annotations automatically"
    save = "save server state to file"
    load = (
        "a space-separated list of files; the first file is the file "
        "containing the saved state, and the rest are the list of files "
        "to recheck"
    )
    version = "print the server version"
    start_time = "process start time in seconds since the epoch"


class _StartupActionFlag(argparse.Action):
    """Stores a startup action, replacing whatever an earlier flag stored."""

    def __init__(self, option_strings, dest, *, read: FileReader = read_file, **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self.read = read

    def parse(self, value: str):
        raise NotImplementedError

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, self.parse(values))


class SaveFlag(_StartupActionFlag):
    def parse(self, value: str):
        return parse_save(value)


class LoadFlag(_StartupActionFlag):
    def parse(self, value: str):
        return parse_load(value, read=self.read)


@dataclass(frozen=True)
class FlagSpec:
    names: tuple[str, ...]
    dest: str
    help: str
    action: str | type[argparse.Action] = "store_true"
    metavar: str | None = None
    type: Callable[[str], Any] | None = None

    @property
    def takes_argument(self) -> bool:
        return self.action != "store_true"


FLAG_TABLE: tuple[FlagSpec, ...] = (
    FlagSpec(("--debug",), "debug", Messages.debug),
    FlagSpec(("--check",), "check", Messages.check),
    FlagSpec(("--json",), "json_mode", Messages.json),
    FlagSpec(("--daemon", "-d"), "should_detach", Messages.daemon),
    FlagSpec(("--from-vim",), "from_vim", Messages.from_vim),
    FlagSpec(("--from-emacs",), "from_emacs", Messages.from_emacs),
    FlagSpec(("--from-hhclient",), "from_hhclient", Messages.from_hhclient),
    FlagSpec(("--convert",), "convert", Messages.convert, action="store", metavar="PATH"),
    FlagSpec(("--save",), "startup_action", Messages.save, action=SaveFlag, metavar="PATH"),
    FlagSpec(("--load",), "startup_action", Messages.load, action=LoadFlag, metavar="SPEC"),
    FlagSpec(("--version",), "version", Messages.version),
    FlagSpec(
        ("--start-time",),
        "start_time",
        Messages.start_time,
        action="store",
        metavar="SECONDS",
        type=float,
    ),
)

PROVENANCE_FLAGS = ("from_vim", "from_emacs", "from_hhclient")


def build_parser(*, read: FileReader = read_file) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE,
        allow_abbrev=False,
    )
    for spec in FLAG_TABLE:
        kwargs: dict[str, Any] = {"dest": spec.dest, "help": spec.help}
        if isinstance(spec.action, type) and issubclass(spec.action, _StartupActionFlag):
            kwargs["read"] = read
        kwargs["action"] = spec.action
        if spec.metavar is not None:
            kwargs["metavar"] = spec.metavar
        if spec.type is not None:
            kwargs["type"] = spec.type
        parser.add_argument(*spec.names, **kwargs)
    parser.set_defaults(startup_action=None, convert=None)
    # Bare tokens are root candidates; only the last one is used.
    parser.add_argument("root", nargs="*", metavar="WWW DIRECTORY")
    return parser


def parse_flags(
    argv: Sequence[str],
    *,
    read: FileReader = read_file,
    clock: Callable[[], float] = time.time,
) -> argparse.Namespace:
    """Run ``argv`` through the flag table.

    The returned namespace is the transient builder for one resolution pass.
    ``start_time`` is captured before any flag is applied so that
    ``--start-time`` can override it.
    """
    parser = build_parser(read=read)
    namespace = argparse.Namespace(start_time=clock())
    return parser.parse_intermixed_args(list(argv), namespace=namespace)
