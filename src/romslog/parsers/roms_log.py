"""Parser for the ROMS standard-output transcript (the run log)."""

import logging
import lzma
import re
import zlib
from dataclasses import fields
from typing import Iterable, Iterator, Optional

from romslog.errors import EmptyInputError, ReadFailureError
from romslog.models import (
    CflRecord, FloatSourceRecord, LogSummary, ParameterInfo, ParseMode,
    StepRecord,
)
from romslog.parsers.dates import SECONDS_PER_DAY, parse_banner_date

log = logging.getLogger(__name__)

# --- Header banners ---
START_DATE_INDENT = 20
RE_START_DATE = re.compile(
    r"^ {%d}\d{4}-\d{2}-\d{2}\b.*\s\wM\s*$" % START_DATE_INDENT
)
VERSION_BANNER = "ROMS/TOMS version"
VERSION_COLUMN = 26
DONE_BANNER = "ROMS/TOMS: DONE"

# --- Section headers (matched against the lower-cased line) ---
PARAMETERS_HEADER = "physical parameters"
FLOAT_SOURCES_HEADER = "floats initial locations"
STEP_HEADER_TOKENS = frozenset({"STEP", "KINETIC_ENRG", "POTEN_ENRG", "TOTAL_ENRG"})

# --- Float count line ---
FLOAT_COUNT_LABEL = "nfloats"
FLOAT_COUNT_PHRASE = "float trajectories"

# --- Record shapes ---
RE_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')
RE_CLOCK = re.compile(r'^\d{2}:\d{2}:\d{2}$')
RE_CFL_INDEX = re.compile(r'^\(.*,.*,.*\)$')
FLOAT_SOURCE_TOKENS = 11
FLOAT_SOURCE_FIRST_LINE_TOKENS = 7

# Raised by line sources on truncated or corrupt (possibly compressed) input
READ_ERRORS = (OSError, EOFError, lzma.LZMAError, zlib.error)

PROGRESS_EVERY = 100_000

# Field converters, in declaration order of each record
FLOAT_SOURCE_LAYOUT = (int, int, int) + (float,) * 8
STEP_LAYOUT = (int, int) + (float,) * 5
CFL_LAYOUT = (float,) * 4
LAYOUTS = {
    FloatSourceRecord: FLOAT_SOURCE_LAYOUT,
    StepRecord: STEP_LAYOUT,
    CflRecord: CFL_LAYOUT,
}


class _RecordDecodeError(ValueError):
    """A line had the right shape but its fields did not convert."""


def is_number(token: str) -> bool:
    return RE_NUMBER.match(token) is not None


def _all_numeric(tokens: list[str], skip: Optional[int] = None) -> bool:
    return all(is_number(t) for i, t in enumerate(tokens) if i != skip)


def _decode(record_type, tokens: list[str]):
    """Fill ``record_type`` positionally from the leading tokens.

    Fields are filled in declaration order with the converters in ``LAYOUTS``.
    Tokens past the last field are ignored.
    """
    names = [f.name for f in fields(record_type)]
    layout = LAYOUTS[record_type]
    if len(tokens) < len(layout):
        raise _RecordDecodeError(
            f"{record_type.__name__} needs {len(layout)} fields, got {len(tokens)}"
        )
    values = {}
    for name, convert, token in zip(names, layout, tokens):
        try:
            values[name] = convert(token)
        except ValueError as e:
            raise _RecordDecodeError(f"{name}: {e}") from e
    return record_type(**values)


def day_fraction(day: str, clock: str) -> float:
    """Combine an integer day count and an HH:MM:SS clock into decimal days."""
    try:
        d = int(day)
        hour, minute, second = (int(p) for p in clock.split(":"))
    except ValueError as e:
        raise _RecordDecodeError(f"bad day/time {day} {clock}") from e
    return d + (hour + (minute + second / 60.0) / 60.0) / 24.0


def _guarded(lines: Iterable[str]) -> Iterator[str]:
    it = iter(lines)
    while True:
        try:
            line = next(it)
        except StopIteration:
            return
        except READ_ERRORS as e:
            raise ReadFailureError(f"log stream failed while reading: {e}") from e
        yield line


class LogParser:
    """Single-pass parser for a ROMS run transcript.

    ``lines`` is any iterable of text lines (an open file, a decompressing
    reader, a list). The parser only borrows it and never closes it.
    """

    def __init__(self, lines: Iterable[str], verbose: bool = False):
        self.lines = lines
        self.verbose = verbose
        self.mode = ParseMode.NONE

    def parse(self) -> LogSummary:
        summary = LogSummary()
        float_sources: list[FloatSourceRecord] = []
        steps: list[StepRecord] = []
        cfl: list[CflRecord] = []
        self.mode = ParseMode.NONE

        lines = _guarded(self.lines)
        for raw in lines:
            summary.line_count += 1
            line = raw.rstrip("\r\n")

            if self.verbose and summary.line_count % PROGRESS_EVERY == 0:
                log.info("%d lines read (%s)", summary.line_count, self.mode.value)

            # ========== Run metadata ==========
            if RE_START_DATE.match(line):
                summary.start_date = parse_banner_date(line[START_DATE_INDENT:])
                continue
            if VERSION_BANNER in line:
                summary.version = line[VERSION_COLUMN:].strip()
                continue
            if DONE_BANNER in line:
                tail = line[line.index(DONE_BANNER) + len(DONE_BANNER):]
                summary.end_date = parse_banner_date(tail.lstrip(". "))
                continue

            # ========== Section headers ==========
            header_mode = self._header_mode(line)
            if header_mode is not None:
                if header_mode != self.mode:
                    log.debug("line %d: entering %s", summary.line_count, header_mode.value)
                self.mode = header_mode
                continue

            tokens = line.split()

            if self.mode == ParseMode.FLOAT_SOURCES and self._is_float_count(line):
                try:
                    summary.float_count = int(tokens[0])
                except ValueError:
                    log.debug("line %d: unreadable float count %r", summary.line_count, tokens[0])
                self.mode = ParseMode.NONE
                continue

            # ========== Mode records ==========
            try:
                if self.mode == ParseMode.PARAMETERS:
                    self._parameter_line(tokens, summary.parameters)
                elif self.mode == ParseMode.FLOAT_SOURCES:
                    record = self._float_source_line(line, tokens, lines, summary)
                    if record is not None:
                        float_sources.append(record)
                elif self.mode == ParseMode.STEPS:
                    record = self._step_line(tokens)
                    if isinstance(record, CflRecord):
                        cfl.append(record)
                    elif record is not None:
                        steps.append(record)
            except _RecordDecodeError as e:
                log.debug("line %d: dropped (%s)", summary.line_count, e)

        if summary.line_count == 0:
            raise EmptyInputError("log contains no lines")

        summary.elapsed_seconds = (summary.end_date - summary.start_date) * SECONDS_PER_DAY
        if float_sources:
            summary.float_sources = float_sources
        if steps:
            summary.steps = steps
        if cfl:
            summary.cfl = cfl

        log.info(
            "parsed %d lines: %d steps, %d CFL samples, %d float sources",
            summary.line_count, len(steps), len(cfl), len(float_sources),
        )
        return summary

    @staticmethod
    def _header_mode(line: str) -> Optional[ParseMode]:
        lowered = line.lower()
        if PARAMETERS_HEADER in lowered:
            return ParseMode.PARAMETERS
        if FLOAT_SOURCES_HEADER in lowered:
            return ParseMode.FLOAT_SOURCES
        if STEP_HEADER_TOKENS.issubset(line.upper().split()):
            return ParseMode.STEPS
        return None

    @staticmethod
    def _is_float_count(line: str) -> bool:
        lowered = line.lower()
        return FLOAT_COUNT_LABEL in lowered and FLOAT_COUNT_PHRASE in lowered

    @staticmethod
    def _parameter_line(tokens: list[str], parameters: ParameterInfo):
        if len(tokens) >= 2 and is_number(tokens[0]) and tokens[1].lower() == "dstart":
            parameters.dstart = float(tokens[0])

    def _float_source_line(
        self, line: str, tokens: list[str], lines: Iterator[str], summary: LogSummary
    ) -> Optional[FloatSourceRecord]:
        if not _all_numeric(tokens):
            return None
        if len(tokens) == FLOAT_SOURCE_TOKENS:
            return _decode(FloatSourceRecord, tokens)
        if len(tokens) == FLOAT_SOURCE_FIRST_LINE_TOKENS:
            continuation = next(lines, None)
            if continuation is None:
                log.debug("line %d: float source cut off at end of log", summary.line_count)
                return None
            summary.line_count += 1
            joined = line + " " + continuation.rstrip("\r\n")
            return _decode(FloatSourceRecord, joined.split())
        return None

    @staticmethod
    def _step_line(tokens: list[str]):
        n = len(tokens)

        # STEP Day HH:MM:SS KE PE TE NV
        if n >= 7 and RE_CLOCK.match(tokens[2]) and _all_numeric(tokens, skip=2):
            time = day_fraction(tokens[1], tokens[2])
            return _decode(StepRecord, ["0", tokens[0], repr(time)] + tokens[3:])

        # Grid STEP Day HH:MM:SS KE PE TE NV (nested grids)
        if n >= 8 and RE_CLOCK.match(tokens[3]) and _all_numeric(tokens, skip=3):
            time = day_fraction(tokens[2], tokens[3])
            return _decode(StepRecord, [tokens[0], tokens[1], repr(time)] + tokens[4:])

        # (i,j,k) Cu Cv Cw MaxStability
        if n >= 5 and RE_CFL_INDEX.match(tokens[0]):
            return _decode(CflRecord, tokens[1:])

        # STEP time[DAYS] KE PE TE NV, with an optional leading grid
        if n >= 6 and _all_numeric(tokens):
            if n == 6:
                tokens = ["0"] + tokens
            return _decode(StepRecord, tokens)

        return None


def parse_lines(lines: Iterable[str], verbose: bool = False) -> LogSummary:
    return LogParser(lines, verbose=verbose).parse()
