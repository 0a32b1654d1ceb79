from .record_parser import RecordParser
from .tokens import coerce_float, split_object_names

__all__ = [
    "RecordParser",
    "coerce_float",
    "split_object_names",
]
