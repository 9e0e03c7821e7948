"""
fluxseries - a client for HTTP time series stores.

High-level SDK usage:
    import fluxseries as fs

    client = fs.Client("metrics", host="localhost", port=8086)

    # Records may have different attributes; missing ones are written as null
    client.write_point("cpu", [
        {"host": "a", "value": 0.5},
        {"host": "b"},
    ])

    # Query results come back as records grouped by series
    series = client.query("select * from cpu")
    # {"cpu": [{"time": ..., "host": "a", "value": 0.5}, ...]}

    # Or one series at a time
    client.query("select * from cpu", visit=lambda name, records: print(name, len(records)))
"""

from .sdk import Client
from .errors import FluxSeriesError, InvalidInput, MalformedResult, TransportError
from .wire import Batch, encode_points, encode_series, decode_each, decode_series

__all__ = [
    'Client',
    'Batch',
    'encode_points',
    'encode_series',
    'decode_each',
    'decode_series',
    'FluxSeriesError',
    'InvalidInput',
    'MalformedResult',
    'TransportError',
]
