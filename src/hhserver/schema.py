from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from hhserver.options import ServerOptions
from hhserver.startup_action import Load, Save


class GcTuningDTO(BaseModel):
    minor_heap_size: int
    space_overhead: int


class StartupActionDTO(BaseModel):
    kind: Literal["fresh", "load", "save"]
    state_file: Optional[str] = None
    to_recheck: List[str] = []


class ServerOptionsDTO(BaseModel):
    check_mode: bool
    json_mode: bool
    root: str
    should_detach: bool
    convert: Optional[str] = None
    startup_action: StartupActionDTO
    version: bool
    start_time: float
    gc_tuning: GcTuningDTO
    assume_php: bool

    @classmethod
    def from_options(cls, options: ServerOptions) -> ServerOptionsDTO:
        action = options.startup_action
        if isinstance(action, Load):
            action_dto = StartupActionDTO(
                kind="load",
                state_file=action.state_file,
                to_recheck=list(action.to_recheck),
            )
        elif isinstance(action, Save):
            action_dto = StartupActionDTO(kind="save", state_file=action.state_file)
        else:
            action_dto = StartupActionDTO(kind="fresh")
        return cls(
            check_mode=options.check_mode,
            json_mode=options.json_mode,
            root=str(options.root),
            should_detach=options.should_detach,
            convert=str(options.convert) if options.convert is not None else None,
            startup_action=action_dto,
            version=options.version,
            start_time=options.start_time,
            gc_tuning=GcTuningDTO(**options.gc_tuning.as_json_dict()),
            assume_php=options.assume_php,
        )
