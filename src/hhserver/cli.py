from __future__ import annotations

import json
from typing import Callable, TypeAlias

import typer

from hhserver import __version__
from hhserver.exceptions import ServerArgsError
from hhserver.log import setup_logging
from hhserver.options import ServerOptions, parse_options
from hhserver.schema import ServerOptionsDTO
from hhserver.startup_action import Load, Save

app = typer.Typer(add_completion=False)

OptionsParser: TypeAlias = Callable[[list[str]], ServerOptions]
ServerStarter: TypeAlias = Callable[[ServerOptions], None]

# Server flags are handed to the flag table untouched, including --help.
_RAW_ARGV_SETTINGS = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "help_option_names": [],
}


@app.callback()
def main_callback() -> None:
    """Startup tooling for the analysis server."""


def render_options(options: ServerOptions) -> str:
    if options.json_mode:
        payload = ServerOptionsDTO.from_options(options).model_dump()
        return json.dumps(payload, indent=2, sort_keys=True)
    action = options.startup_action
    lines = [
        f"root: {options.root}",
        f"mode: {'check' if options.check_mode else 'server'}",
        f"detach: {options.should_detach}",
        f"init: {options.init_type}",
    ]
    if isinstance(action, (Load, Save)):
        lines.append(f"state file: {action.state_file}")
    if isinstance(action, Load) and action.to_recheck:
        lines.append(f"recheck: {len(action.to_recheck)} files")
    if options.convert is not None:
        lines.append(f"convert: {options.convert}")
    gc = options.gc_tuning
    lines.append(
        f"worker gc: minor_heap_size={gc.minor_heap_size} space_overhead={gc.space_overhead}"
    )
    lines.append(f"assume_php: {options.assume_php}")
    return "\n".join(lines)


def resolve_or_exit(argv: list[str], *, parse: OptionsParser = parse_options) -> ServerOptions:
    setup_logging(debug="--debug" in argv, json_logs="--json" in argv)
    try:
        return parse(argv)
    except SystemExit as exc:
        raise typer.Exit(code=int(exc.code or 0))
    except (ServerArgsError, OSError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("resolve", context_settings=_RAW_ARGV_SETTINGS)
def resolve(ctx: typer.Context) -> None:
    """Resolve server flags and .hhconfig into startup options."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    parse: OptionsParser = obj.get("parse_options", parse_options)
    start_server: ServerStarter | None = obj.get("start_server")
    options = resolve_or_exit(list(ctx.args), parse=parse)
    if options.version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    if start_server is not None:
        start_server(options)
        return
    typer.echo(render_options(options))


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
