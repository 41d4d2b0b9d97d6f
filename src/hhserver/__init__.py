"""Startup option resolution for the hh analysis server."""

from hhserver.options import ServerOptions, default_options, parse_options

__all__ = ["__version__", "ServerOptions", "default_options", "parse_options"]

__version__ = "0.1.0"
