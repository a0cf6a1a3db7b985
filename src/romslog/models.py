"""Data models for ROMS run transcript parsing."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ParseMode(Enum):
    NONE = "NONE"
    PARAMETERS = "PARAMETERS"
    FLOAT_SOURCES = "FLOAT_SOURCES"
    STEPS = "STEPS"


@dataclass
class ParameterInfo:
    dstart: float = math.nan  # start day of run


@dataclass(frozen=True)
class FloatSourceRecord:
    grid: int
    coordinate_flag: int
    count: int
    t0: float
    x0: float
    y0: float
    z0: float
    dt: float
    dx: float
    dy: float
    dz: float


@dataclass(frozen=True)
class StepRecord:
    grid: int
    step: int
    time: float  # decimal days
    kinetic_energy: float
    potential_energy: float
    total_energy: float
    net_volume: float


@dataclass(frozen=True)
class CflRecord:
    cu: float
    cv: float
    cw: float
    max_stability_parameter: float


@dataclass
class LogSummary:
    """Everything extracted from one run transcript.

    ``float_sources``, ``steps`` and ``cfl`` stay ``None`` when the log held
    no record of that kind; they are never empty lists.
    """

    line_count: int = 0
    version: str = ""
    start_date: float = math.nan  # day number, see parsers.dates
    end_date: float = math.nan
    elapsed_seconds: float = math.nan
    float_count: int = 0
    parameters: ParameterInfo = field(default_factory=ParameterInfo)
    float_sources: Optional[list[FloatSourceRecord]] = None
    steps: Optional[list[StepRecord]] = None
    cfl: Optional[list[CflRecord]] = None

    @property
    def grids(self) -> tuple[int, ...]:
        if not self.steps:
            return ()
        return tuple(sorted({s.grid for s in self.steps}))

    @property
    def max_cfl(self) -> Optional[CflRecord]:
        if not self.cfl:
            return None
        return max(self.cfl, key=lambda c: c.max_stability_parameter)
