"""
High-level SDK for fluxseries.

Provides a Client that writes records to named series and reads query
results back as records grouped by series, plus the database and user
administration calls of the HTTP API.
"""
import logging
import os
from typing import Any, Callable, Dict, List, Mapping, Optional

import pandas as pd
import requests
from dotenv import load_dotenv, find_dotenv

from .frames import dataframe_to_records, records_to_dataframe
from .transport import HTTPTransport
from .wire import decode_each, decode_series, encode_points, encode_series
from .wire.encode import Records

load_dotenv(find_dotenv())

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8086
DEFAULT_USERNAME = "root"
DEFAULT_PASSWORD = "root"
DEFAULT_TIMEOUT = 10.0

TIME_PRECISIONS = ("s", "m", "u")


def _setting(value: Optional[Any], env_var: str, default: Any) -> Any:
    """Explicit value, then environment variable, then default."""
    if value is not None:
        return value
    env_value = os.environ.get(env_var)
    if env_value:
        return env_value
    return default


def _check_precision(time_precision: Optional[str]) -> Optional[str]:
    if time_precision is not None and time_precision not in TIME_PRECISIONS:
        raise ValueError(
            f"Invalid time_precision: {time_precision}. Must be one of {', '.join(TIME_PRECISIONS)}"
        )
    return time_precision


class Client:
    """
    Client for a single server, optionally bound to a database.

    Connection settings not passed explicitly are read from FLUXSERIES_HOST,
    FLUXSERIES_PORT, FLUXSERIES_USERNAME, FLUXSERIES_PASSWORD,
    FLUXSERIES_DATABASE and FLUXSERIES_TIMEOUT, falling back to
    localhost:8086 with root/root.

    Example:
        client = Client("metrics")
        client.write_point("cpu", [{"host": "a", "value": 0.5}, {"host": "b"}])
        series = client.query("select * from cpu")
    """

    def __init__(
        self,
        database: Optional[str] = None,
        *,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[HTTPTransport] = None,
    ) -> None:
        self.database = _setting(database, "FLUXSERIES_DATABASE", None)
        self.host = _setting(host, "FLUXSERIES_HOST", DEFAULT_HOST)
        port = _setting(port, "FLUXSERIES_PORT", DEFAULT_PORT)
        try:
            self.port = int(port)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port: {port!r}") from None
        self.username = _setting(username, "FLUXSERIES_USERNAME", DEFAULT_USERNAME)
        self.password = _setting(password, "FLUXSERIES_PASSWORD", DEFAULT_PASSWORD)
        self.timeout = float(_setting(timeout, "FLUXSERIES_TIMEOUT", DEFAULT_TIMEOUT))

        self.transport = transport or HTTPTransport(
            self.host,
            self.port,
            self.username,
            self.password,
            timeout=self.timeout,
        )

    def __repr__(self) -> str:
        return f"Client(database={self.database!r}, host={self.host!r}, port={self.port!r})"

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()

    def _series_path(self) -> str:
        if not self.database:
            raise ValueError(
                "No database configured. Pass a database to Client() or set FLUXSERIES_DATABASE."
            )
        return f"/db/{self.database}/series"

    # -------------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------------

    def create_database(self, name: str) -> requests.Response:
        """Create a database."""
        logger.info("Creating database %s", name)
        return self.transport.post_json("/db", body={"name": name})

    def delete_database(self, name: str) -> requests.Response:
        """Delete a database and all of its series."""
        logger.info("Deleting database %s", name)
        return self.transport.delete(f"/db/{name}")

    def get_database_list(self) -> List[Dict[str, Any]]:
        """List databases as returned by the server, e.g. [{"name": "metrics"}]."""
        return self.transport.get_json("/dbs")

    def create_database_user(self, database: str, username: str, password: str) -> requests.Response:
        """Create a user with access to a database."""
        logger.info("Creating user %s on database %s", username, database)
        return self.transport.post_json(
            f"/db/{database}/users",
            body={"username": username, "password": password},
        )

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def write_point(
        self,
        name: str,
        data: Records,
        time_precision: Optional[str] = None,
    ) -> requests.Response:
        """
        Write one record or a list of records to a series.

        Records do not need to share attributes: the written columns are the
        union of all attribute names, and absent attributes are sent as null.

        Args:
            name: Series name
            data: A record (mapping) or a list of records
            time_precision: Precision of 'time' values ('s', 'm' or 'u'), passed to the server

        Raises:
            InvalidInput: If name or data is empty or malformed
            TransportError: If the request fails
        """
        path = self._series_path()
        batch = encode_points(name, data)
        logger.debug("Writing %d point(s) to %s", len(batch.points), name)
        return self.transport.post_json(
            path,
            params={"time_precision": _check_precision(time_precision)},
            body=[batch.to_payload()],
        )

    def write_points(
        self,
        data: Mapping[str, Records],
        time_precision: Optional[str] = None,
    ) -> requests.Response:
        """
        Write records to several series in one request.

        Args:
            data: Mapping of series name to a record or a list of records
            time_precision: Precision of 'time' values ('s', 'm' or 'u')
        """
        path = self._series_path()
        batches = encode_series(data)
        logger.debug("Writing %d series", len(batches))
        return self.transport.post_json(
            path,
            params={"time_precision": _check_precision(time_precision)},
            body=[batch.to_payload() for batch in batches],
        )

    def write_dataframe(
        self,
        name: str,
        df: pd.DataFrame,
        time_column: Optional[str] = "time",
        time_precision: str = "m",
    ) -> requests.Response:
        """
        Write every row of a DataFrame as a point of one series.

        A DatetimeIndex (or datetime values in time_column) is sent as epoch
        integers in time_precision. NaN values are sent as null.
        """
        records = dataframe_to_records(df, time_column=time_column, time_precision=time_precision)
        return self.write_point(name, records, time_precision=time_precision)

    # -------------------------------------------------------------------------
    # Querying
    # -------------------------------------------------------------------------

    def query(
        self,
        q: str,
        visit: Optional[Callable[[str, List[Dict[str, Any]]], None]] = None,
        time_precision: Optional[str] = None,
    ) -> Optional[Dict[str, List[Dict[str, Any]]]]:
        """
        Run a query and decode the result.

        Without a visitor, returns a dict mapping series name to its records.
        With a visitor, calls visit(name, records) once per series in the order
        the server returned them, and returns None.

        Raises:
            MalformedResult: If the response is not a valid list of series
            TransportError: If the request fails
        """
        logger.debug("Query: %s", q)
        result = self.transport.get_json(
            self._series_path(),
            params={"q": q, "time_precision": _check_precision(time_precision)},
        )
        if visit is None:
            return decode_series(result)
        decode_each(result, visit)
        return None

    def query_dataframes(
        self,
        q: str,
        time_column: Optional[str] = "time",
        time_precision: str = "m",
    ) -> Dict[str, pd.DataFrame]:
        """Run a query and return one DataFrame per series, indexed by time when present."""
        series = self.query(q, time_precision=time_precision)
        return {
            name: records_to_dataframe(records, time_column=time_column, time_precision=time_precision)
            for name, records in series.items()
        }
