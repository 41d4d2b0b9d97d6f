from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping, TypeAlias

from hhserver.exceptions import ConfigParseError
from hhserver.gc_tuning import GcTuning

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".hhconfig"

RawConfig: TypeAlias = dict[str, str]
ConfigReader: TypeAlias = Callable[[Path], RawConfig]

GC_MINOR_HEAP_SIZE_KEY = "gc_minor_heap_size"
GC_SPACE_OVERHEAD_KEY = "gc_space_overhead"
ASSUME_PHP_KEY = "assume_php"


def parse_config_text(raw: str, *, source: str = DEFAULT_CONFIG_NAME) -> RawConfig:
    """Parse ``key = value`` lines.

    Blank lines and ``#`` comments are skipped. A repeated key keeps its last
    value.
    """
    data: RawConfig = {}
    for lineno, line in enumerate(raw.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigParseError(
                f"{source}:{lineno}: expected 'key = value', got {stripped!r}",
                key=key,
            )
        data[key] = value.strip()
    return data


def parse_config_file(path: Path) -> RawConfig:
    raw = path.read_text(encoding="utf-8")
    return parse_config_text(raw, source=str(path))


def load_config(root: Path, *, reader: ConfigReader = parse_config_file) -> RawConfig:
    return reader(root / DEFAULT_CONFIG_NAME)


def _as_int(config: Mapping[str, str], key: str) -> int | None:
    value = config.get(key)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigParseError(
            f"{key} must be an integer, got {value!r}", key=key, value=value
        ) from exc


def _as_bool(config: Mapping[str, str], key: str) -> bool | None:
    value = config.get(key)
    if value is None:
        return None
    normalized = value.strip()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ConfigParseError(
        f"{key} must be 'true' or 'false', got {value!r}", key=key, value=value
    )


def make_gc_tuning(config: Mapping[str, str], baseline: GcTuning) -> GcTuning:
    minor_heap_size = _as_int(config, GC_MINOR_HEAP_SIZE_KEY)
    space_overhead = _as_int(config, GC_SPACE_OVERHEAD_KEY)
    if minor_heap_size is not None or space_overhead is not None:
        logger.debug(
            "gc overrides from config: minor_heap_size=%s space_overhead=%s",
            minor_heap_size,
            space_overhead,
        )
    return baseline.with_overrides(
        minor_heap_size=minor_heap_size,
        space_overhead=space_overhead,
    )


def config_assume_php(config: Mapping[str, str]) -> bool:
    value = _as_bool(config, ASSUME_PHP_KEY)
    return True if value is None else value
