"""
Record to batch encoding.

The write endpoint takes one object per series holding a shared, ordered list
of column names and one positional row per record:

    {"name": "seriez", "columns": ["name", "age"], "points": [["juan", 87]]}

Records are free-form mappings, so the column list is the union of attribute
names across all records, in the order they are first seen. A record that
lacks one of those attributes gets None at that position.
"""
from typing import Any, Dict, List, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidInput

Record = Mapping[str, Any]
Records = Union[Record, Sequence[Record]]


class Batch(BaseModel):
    """Points for one series, aligned to a shared column list."""
    name: str
    points: List[List[Any]] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict in the shape the write endpoint expects."""
        return {
            "name": self.name,
            "points": [list(row) for row in self.points],
            "columns": list(self.columns),
        }


def _normalize_records(records: Records) -> List[Record]:
    # A single record is written as a batch of one
    if isinstance(records, Mapping):
        return [records]
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise InvalidInput(
            f"records must be a mapping or a sequence of mappings, got {type(records).__name__}"
        )

    normalized = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidInput(
                f"Record at position {index} must be a mapping, got {type(record).__name__}"
            )
        normalized.append(record)
    return normalized


def collect_columns(records: Sequence[Record]) -> List[str]:
    """
    Ordered union of attribute names across records.

    Names keep the position of their first occurrence; matching is exact, so
    "Age" and "age" are two different columns.
    """
    columns: List[str] = []
    seen = set()
    for record in records:
        for key in record.keys():
            if not isinstance(key, str):
                raise InvalidInput(f"Attribute names must be strings, got {key!r}")
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return columns


def encode_points(series_name: str, records: Records) -> Batch:
    """
    Encode one or more records for a series into a Batch.

    Args:
        series_name: Name of the target series (non-empty)
        records: A single record or a non-empty sequence of records

    Returns:
        Batch whose rows are aligned to its columns, in input record order

    Raises:
        InvalidInput: If series_name is empty or records is empty or malformed
    """
    if not isinstance(series_name, str) or not series_name:
        raise InvalidInput("series_name must be a non-empty string")

    normalized = _normalize_records(records)
    if not normalized:
        raise InvalidInput(f"No records given for series '{series_name}'")

    columns = collect_columns(normalized)
    points = [
        [record[column] if column in record else None for column in columns]
        for record in normalized
    ]
    return Batch(name=series_name, columns=columns, points=points)


def encode_series(data: Mapping[str, Records]) -> List[Batch]:
    """
    Encode records for several series at once.

    Args:
        data: Mapping of series name to a record or a sequence of records

    Returns:
        One Batch per series name, in mapping order
    """
    if not isinstance(data, Mapping) or not data:
        raise InvalidInput("data must be a non-empty mapping of series name to records")
    return [encode_points(name, records) for name, records in data.items()]
