"""JSON report writer for a parsed run log."""

import dataclasses
import json
import math
from pathlib import Path

from romslog.models import LogSummary
from romslog.parsers.dates import day_number_to_datetime

# Present only when the log had records of that kind
OPTIONAL_SEQUENCES = ("float_sources", "steps", "cfl")


def _convert(obj):
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _convert(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    elif isinstance(obj, list):
        return [_convert(item) for item in obj]
    elif isinstance(obj, float) and math.isnan(obj):
        return None
    return obj


def summary_to_dict(summary: LogSummary) -> dict:
    """Convert a LogSummary to a JSON-serializable dictionary.

    NaN becomes ``None`` and absent record sequences are left out
    rather than written as empty lists.
    """
    data = _convert(summary)
    for key in OPTIONAL_SEQUENCES:
        if data[key] is None:
            del data[key]

    for key in ("start_date", "end_date"):
        moment = day_number_to_datetime(getattr(summary, key))
        data[f"{key}_iso"] = moment.isoformat(timespec="seconds") if moment else None
    return data


def write_json_report(summary: LogSummary, filepath: Path):
    """Write the summary as a JSON file."""
    data = summary_to_dict(summary)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
