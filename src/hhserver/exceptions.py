"""Error taxonomy for server startup resolution."""

from __future__ import annotations

from pathlib import Path

# Documented exit status when no project root is given on the command line.
EXIT_MISSING_ROOT = 2


class ServerArgsError(Exception):
    """Base class for failures while resolving startup options.

    None of these are caught by the resolver; each one is fatal to startup.
    """


class ArgumentError(ServerArgsError):
    """A flag received an argument it cannot accept."""


class LoadArgumentError(ArgumentError, ValueError):
    """``--load`` was given the wrong number of whitespace-separated tokens."""

    def __init__(self, message: str, *, spec: str):
        super().__init__(message)
        self.spec = spec


class ConfigParseError(ServerArgsError, ValueError):
    """A recognized ``.hhconfig`` key holds a value of the wrong shape."""

    def __init__(self, message: str, *, key: str, value: str | None = None):
        super().__init__(message)
        self.key = key
        self.value = value


class ValidationError(ServerArgsError):
    """Delegated validation rejected an input."""


class InvalidRootError(ValidationError):
    """The resolved root is not a project root."""

    def __init__(self, message: str, *, root: Path):
        super().__init__(message)
        self.root = root
