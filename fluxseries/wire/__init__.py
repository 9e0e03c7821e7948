"""Wire format encoding and decoding for fluxseries."""

from . import encode
from . import decode
from .encode import Batch, encode_points, encode_series
from .decode import decode_each, decode_series

__all__ = [
    "encode",
    "decode",
    "Batch",
    "encode_points",
    "encode_series",
    "decode_each",
    "decode_series",
]
