"""
pandas conversion helpers for fluxseries.

Turns DataFrame rows into records for writing and decoded records back into
DataFrames. Missing values (NaN/None/NaT) become None in records, so they are
written as the explicit missing-value marker.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

# time_precision query value -> pandas unit
_PRECISION_UNITS = {
    "s": "s",
    "m": "ms",
    "u": "us",
}


def _unit_for(time_precision: str) -> str:
    try:
        return _PRECISION_UNITS[time_precision]
    except KeyError:
        raise ValueError(
            f"Invalid time_precision: {time_precision}. Must be one of {sorted(_PRECISION_UNITS)}"
        ) from None


def _to_epoch(value: Any, time_precision: str) -> int:
    timestamp = pd.Timestamp(value)
    if timestamp.tzinfo is None:
        raise ValueError("Time values must be timezone-aware. Found timezone-naive datetime.")
    delta = timestamp.tz_convert("UTC") - pd.Timestamp(0, tz="UTC")
    return int(delta // pd.Timedelta(1, unit=_unit_for(time_precision)))


def _to_scalar(value: Any) -> Any:
    if value is None:
        return None
    if not isinstance(value, (list, tuple, dict)) and pd.isna(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def dataframe_to_records(
    df: pd.DataFrame,
    time_column: Optional[str] = "time",
    time_precision: str = "m",
) -> List[Dict[str, Any]]:
    """
    Convert a DataFrame into records, one per row.

    If the DataFrame has a DatetimeIndex, it is written as time_column.
    Datetime values in time_column are converted to integer epochs in the
    given precision ("s", "m" for milliseconds, "u" for microseconds).

    Args:
        df: DataFrame to convert
        time_column: Name of the time attribute (default: 'time'); None disables time handling
        time_precision: Epoch precision for time values (default: 'm')

    Returns:
        List of records with column names as attribute names
    """
    if isinstance(df.index, pd.DatetimeIndex) and time_column is not None:
        if time_column in df.columns:
            raise ValueError(f"Column '{time_column}' present both as index and as column")
        df = df.reset_index(names=time_column)

    for col in df.columns:
        if not isinstance(col, str):
            raise ValueError(f"Column names must be strings, got {col!r}")

    records = []
    for row in df.itertuples(index=False, name=None):
        record = {}
        for col, value in zip(df.columns, row):
            value = _to_scalar(value)
            if col == time_column and isinstance(value, (datetime, pd.Timestamp, np.datetime64)):
                value = _to_epoch(value, time_precision)
            record[col] = value
        records.append(record)
    return records


def records_to_dataframe(
    records: Sequence[Dict[str, Any]],
    time_column: Optional[str] = "time",
    time_precision: str = "m",
) -> pd.DataFrame:
    """
    Convert decoded records into a DataFrame.

    If time_column is present, its epoch values are converted to UTC
    timestamps and used as a sorted index.
    """
    df = pd.DataFrame.from_records(list(records))
    if len(df) == 0 or time_column is None or time_column not in df.columns:
        return df

    df[time_column] = pd.to_datetime(df[time_column], unit=_unit_for(time_precision), utc=True)
    return df.set_index(time_column).sort_index()
