"""Walker options model.

This module defines the configuration fixed on a Walker at construction time.
- app_icon names the configured application icon; the root-level icon pattern
  is derived from its base name.
- use_app_thinning routes eligible images to the asset catalog bucket.
- ignore_dirs / ignore_files prune directories and skip files by name.

Regex options accept either compiled patterns or pattern strings (as read from
the CLI or config.toml); strings are compiled during validation so that an
invalid pattern is reported before any walk starts.
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_APP_ICON = "appicon.png"

# Version control, CVS and recycle-bin directories never belong in a package.
DEFAULT_IGNORE_DIRS = r"^(\.svn|_svn|\.git|\.hg|\.?[Cc][Vv][Ss]|\.bzr|\$RECYCLE\.BIN)$"

# VCS bookkeeping, OS metadata and editor project files.
DEFAULT_IGNORE_FILES = (
    r"^(\.gitignore|\.npmignore|\.cvsignore|\.DS_Store|\._.*|[Tt]humbs.db|"
    r"\.vspscc|\.vssscc|\.sublime-project|\.sublime-workspace|\.project|\.tmproj)$"
)


class WalkerOptions(BaseModel):
    """Options controlling how a Walker classifies and filters entries."""

    app_icon: Optional[str] = DEFAULT_APP_ICON
    """Application icon filename (e.g. 'appicon.png'). None disables icon detection."""

    use_app_thinning: bool = False
    """Whether eligible images go to image_assets instead of resources_to_copy."""

    ignore_dirs: Optional[re.Pattern[str]] = None
    """Directory names matching this pattern are pruned with their subtree."""

    ignore_files: Optional[re.Pattern[str]] = None
    """File names matching this pattern are skipped."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("ignore_dirs", "ignore_files", mode="before")
    @classmethod
    def compile_pattern(cls, value: object) -> object:
        """Compile pattern strings, treating empty strings as no pattern.

        Raises:
            ValueError: If the string is not a valid regular expression.
        """
        if value is None or isinstance(value, re.Pattern):
            return value
        if isinstance(value, str):
            if not value:
                return None
            try:
                return re.compile(value)
            except re.error as e:
                raise ValueError(f"Invalid regular expression {value!r}: {e}") from e
        return value

    @classmethod
    def with_defaults(cls, **overrides: object) -> "WalkerOptions":
        """Build options using the default ignore patterns unless overridden."""
        values: dict[str, object] = {
            "ignore_dirs": DEFAULT_IGNORE_DIRS,
            "ignore_files": DEFAULT_IGNORE_FILES,
        }
        values.update(overrides)
        return cls(**values)
