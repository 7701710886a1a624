"""Domain models for the appgather application."""

from appgather.models.core import Bucket, FileRecord, GatherResult
from appgather.models.walk import WalkerOptions

__all__ = [
    "Bucket",
    "FileRecord",
    "GatherResult",
    "WalkerOptions",
]
