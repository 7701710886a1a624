"""JSON serialization helpers for appgather.

Gather results contain Path objects and sets, neither of which the standard
JSON encoder supports.
- Path objects are serialized as strings for portability across OSes.
- Sets are serialized as sorted lists so output is stable between runs.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Self


class GatherEncoder(json.JSONEncoder):
    """Custom JSON encoder for gather results."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to JSON-serializable format.

        Args:
            obj: Object to serialize (Path, set, Enum or other types)

        Returns:
            JSON-serializable representation of the object.
        """
        if isinstance(obj, Path):
            return obj.as_posix()
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        if isinstance(obj, Enum):
            return obj.value
        # Let the base class default method handle it or raise TypeError
        return super().default(obj)
