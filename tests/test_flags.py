from __future__ import annotations

import pytest

from hhserver.exceptions import LoadArgumentError
from hhserver.flags import FLAG_TABLE, PROVENANCE_FLAGS, build_parser, parse_flags
from hhserver.startup_action import Load, Save


def _clock() -> float:
    return 12.5


def _parse(argv: list[str], **kwargs):
    return parse_flags(argv, clock=_clock, **kwargs)


def test_flag_table_lists_every_server_flag_once() -> None:
    names = [name for spec in FLAG_TABLE for name in spec.names]
    assert names == [
        "--debug",
        "--check",
        "--json",
        "--daemon",
        "-d",
        "--from-vim",
        "--from-emacs",
        "--from-hhclient",
        "--convert",
        "--save",
        "--load",
        "--version",
        "--start-time",
    ]
    assert len(set(names)) == len(names)


def test_flag_table_marks_flags_that_take_arguments() -> None:
    with_argument = {spec.names[0] for spec in FLAG_TABLE if spec.takes_argument}
    assert with_argument == {"--convert", "--save", "--load", "--start-time"}


def test_parse_flags_defaults() -> None:
    flags = _parse([])
    assert flags.debug is False
    assert flags.check is False
    assert flags.json_mode is False
    assert flags.should_detach is False
    assert flags.convert is None
    assert flags.startup_action is None
    assert flags.version is False
    assert flags.start_time == 12.5
    assert not flags.root
    for name in PROVENANCE_FLAGS:
        assert getattr(flags, name) is False


def test_parse_flags_sets_switches() -> None:
    flags = _parse(
        ["--debug", "--check", "--json", "-d", "--from-vim", "--from-emacs", "--version", "www"]
    )
    assert flags.debug is True
    assert flags.check is True
    assert flags.json_mode is True
    assert flags.should_detach is True
    assert flags.from_vim is True
    assert flags.from_emacs is True
    assert flags.from_hhclient is False
    assert flags.version is True
    assert flags.root == ["www"]


def test_parse_flags_long_daemon_flag() -> None:
    assert _parse(["--daemon"]).should_detach is True


def test_parse_flags_start_time_overrides_clock() -> None:
    assert _parse(["--start-time", "42.25"]).start_time == 42.25


def test_parse_flags_rejects_non_float_start_time() -> None:
    with pytest.raises(SystemExit) as exc:
        _parse(["--start-time", "soon"])
    assert exc.value.code == 2


def test_parse_flags_keeps_every_positional_in_order() -> None:
    assert _parse(["foo", "--check", "bar"]).root == ["foo", "bar"]


def test_parse_flags_convert_records_path() -> None:
    assert _parse(["--convert", "out"]).convert == "out"


def test_parse_flags_later_load_replaces_save() -> None:
    flags = _parse(["--save", "s", "--load", "a"])
    assert flags.startup_action == Load(state_file="a", to_recheck=())


def test_parse_flags_later_save_replaces_load() -> None:
    flags = _parse(["--load", "a", "--save", "s"])
    assert flags.startup_action == Save(state_file="s")


def test_parse_flags_load_uses_injected_reader() -> None:
    flags = _parse(["--load", "a b"], read=lambda path: "x\ny\n")
    assert flags.startup_action == Load(state_file="a", to_recheck=("x", "y"))


def test_parse_flags_load_errors_propagate() -> None:
    with pytest.raises(LoadArgumentError):
        _parse(["--load", ""])
    with pytest.raises(LoadArgumentError):
        _parse(["--load", "a b c"])


def test_parse_flags_rejects_unknown_flag() -> None:
    with pytest.raises(SystemExit) as exc:
        _parse(["--nope", "www"])
    assert exc.value.code == 2


def test_parse_flags_rejects_abbreviated_flag() -> None:
    with pytest.raises(SystemExit) as exc:
        _parse(["--che", "www"])
    assert exc.value.code == 2


def test_build_parser_help_mentions_load_grammar() -> None:
    help_text = build_parser().format_help()
    assert "--load SPEC" in help_text
    assert "files to recheck" in " ".join(help_text.split())
