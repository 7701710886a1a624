"""Base abstraction for markup analyzers.

A markup analyzer reads one markup file and reports the local scripts it
references directly. The walker uses it to find scripts that must be copied
verbatim instead of going through the script pipeline.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class MarkupAnalyzer(ABC):
    """Abstract base class for markup analyzers.

    Injected into the Walker so tests and callers can substitute their own.
    """

    @abstractmethod
    def analyze(self, file_path: Path, relative_base_dir: str) -> list[str]:
        """Return the relative paths of scripts referenced by *file_path*.

        Args:
            file_path: Absolute path of the markup file.
            relative_base_dir: Relative directory of the markup file within the
                walked tree ("" for the root); script sources are resolved
                against it.

        Returns:
            Relative script paths using "/" separators.

        Raises:
            OSError: If the file cannot be read.
        """
        raise NotImplementedError
