"""Tabular export of derived records.

Records are flattened into a pandas DataFrame and written as JSON or CSV.
JSON keys use the dashboard's camelCase names (``goalsScored``, ``winRate``).

Example:
    >>> frame = records_to_frame(standings)
    >>> print(render_json(standings))
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict, fields, is_dataclass
from typing import Any, Literal

import pandas as pd

OutputFormat = Literal["table", "json", "csv"]
OUTPUT_FORMATS: tuple[str, ...] = ("table", "json", "csv")


def to_camel(name: str) -> str:
    """Convert a snake_case field name to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def records_to_frame(
    records: Sequence[Any], camel_case: bool = False
) -> pd.DataFrame:
    """Build a DataFrame with one row per record.

    Args:
        records: Dataclass records of a single type.
        camel_case: Rename columns to camelCase.

    Returns:
        DataFrame with columns in field order, or an empty DataFrame when
        there are no records.

    Raises:
        TypeError: If the records are not dataclass instances.
    """
    if not records:
        return pd.DataFrame()
    first = records[0]
    if not is_dataclass(first):
        raise TypeError(f"Expected dataclass records, got {type(first).__name__}")

    columns = [f.name for f in fields(first)]
    frame = pd.DataFrame([asdict(record) for record in records], columns=columns)
    if camel_case:
        frame = frame.rename(columns=to_camel)
    return frame


def render_json(records: Sequence[Any]) -> str:
    """Serialize records to a JSON array with camelCase keys."""
    frame = records_to_frame(records, camel_case=True)
    if frame.empty:
        return "[]"
    return json.dumps(json.loads(frame.to_json(orient="records")), indent=2)


def render_record_json(record: Any) -> str:
    """Serialize a single record to a JSON object with camelCase keys."""
    return json.dumps(
        {to_camel(key): value for key, value in asdict(record).items()}, indent=2
    )


def render_csv(records: Sequence[Any]) -> str:
    """Serialize records to CSV with snake_case headers."""
    frame = records_to_frame(records)
    return frame.to_csv(index=False)
