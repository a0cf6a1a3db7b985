"""Structured summaries of ROMS ocean-model run logs."""

__version__ = "0.1.0"

from romslog.errors import (
    EmptyInputError, InvalidArgumentError, ReadFailureError, RomsLogError,
    UnreadableError,
)
from romslog.models import (
    CflRecord, FloatSourceRecord, LogSummary, ParameterInfo, ParseMode,
    StepRecord,
)
from romslog.parsers.roms_log import LogParser, parse_lines
from romslog.reader import read_log
