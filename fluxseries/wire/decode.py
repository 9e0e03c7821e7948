"""
Query result decoding.

A query response is a list of series objects, each with its own column list
and positional rows:

    [{"name": "foo", "columns": ["name", "age"], "values": [["shahid", 99]]}]

Some endpoints return the rows under "points" instead of "values"; both are
accepted. Each row is zipped against its series' columns into a dict.
"""
from typing import Any, Callable, Dict, List, Mapping, Sequence

from ..errors import MalformedResult

Visitor = Callable[[str, List[Dict[str, Any]]], None]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _rows_of(entry: Mapping[str, Any], index: int) -> Sequence[Sequence[Any]]:
    if "values" in entry:
        rows = entry["values"]
    elif "points" in entry:
        rows = entry["points"]
    else:
        raise MalformedResult(f"Series at position {index} has neither 'values' nor 'points'")
    if not _is_sequence(rows):
        raise MalformedResult(f"Rows of series at position {index} must be a list")
    return rows


def _columns_of(entry: Mapping[str, Any], name: str) -> Sequence[str]:
    if "columns" not in entry:
        raise MalformedResult(f"Series '{name}' has no 'columns'")
    columns = entry["columns"]
    if not _is_sequence(columns):
        raise MalformedResult(f"Columns of series '{name}' must be a list")
    for column in columns:
        if not isinstance(column, str):
            raise MalformedResult(f"Column names of series '{name}' must be strings, got {column!r}")
    # Zipping against repeated names would silently drop values
    if len(set(columns)) != len(columns):
        raise MalformedResult(f"Series '{name}' has duplicate column names: {list(columns)}")
    return columns


def _decode_entry(entry: Any, index: int):
    if not isinstance(entry, Mapping):
        raise MalformedResult(f"Series at position {index} must be an object, got {type(entry).__name__}")
    if "name" not in entry:
        raise MalformedResult(f"Series at position {index} has no 'name'")

    name = entry["name"]
    if not isinstance(name, str):
        raise MalformedResult(f"Name of series at position {index} must be a string, got {name!r}")
    columns = _columns_of(entry, name)

    records = []
    for row_index, row in enumerate(_rows_of(entry, index)):
        if not _is_sequence(row) or len(row) != len(columns):
            raise MalformedResult(
                f"Row {row_index} of series '{name}' has "
                f"{len(row) if _is_sequence(row) else 'no'} values for {len(columns)} columns"
            )
        records.append(dict(zip(columns, row)))
    return name, records


def decode_each(query_result: Sequence[Any], visit: Visitor) -> None:
    """
    Decode a query result and hand each series to a visitor.

    visit(name, records) is called once per series, synchronously, in the
    order the series appear in query_result. Only one series' records are
    held at a time.

    Raises:
        MalformedResult: If the result or any of its series is malformed
    """
    if not _is_sequence(query_result):
        raise MalformedResult(f"Query result must be a list, got {type(query_result).__name__}")

    for index, entry in enumerate(query_result):
        name, records = _decode_entry(entry, index)
        visit(name, records)


def decode_series(query_result: Sequence[Any]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Decode a query result into a mapping of series name to records.

    If the same series name appears more than once, the later records are
    appended after the earlier ones.
    """
    series: Dict[str, List[Dict[str, Any]]] = {}

    def collect(name: str, records: List[Dict[str, Any]]) -> None:
        series.setdefault(name, []).extend(records)

    decode_each(query_result, collect)
    return series
