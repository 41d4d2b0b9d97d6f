from __future__ import annotations

from dataclasses import asdict, dataclass, replace


@dataclass(frozen=True)
class GcTuning:
    """Garbage-collector sizing handed to server processes.

    The values are opaque here; they are forwarded to whatever spawns the
    process and never interpreted.
    """

    minor_heap_size: int
    space_overhead: int

    def with_overrides(
        self,
        *,
        minor_heap_size: int | None = None,
        space_overhead: int | None = None,
    ) -> GcTuning:
        return replace(
            self,
            minor_heap_size=self.minor_heap_size if minor_heap_size is None else minor_heap_size,
            space_overhead=self.space_overhead if space_overhead is None else space_overhead,
        )

    def as_json_dict(self) -> dict[str, int]:
        return asdict(self)


# Long-lived main server process.
MAIN_PROCESS_GC = GcTuning(minor_heap_size=262_144, space_overhead=80)

# Workers are short-lived, so they trade memory for fewer collections. This is
# the baseline that .hhconfig overrides apply to.
WORKER_GC_BASELINE = GcTuning(minor_heap_size=2_097_152, space_overhead=200)
