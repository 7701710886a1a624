"""Filename pattern rules for classifying packaged files."""

from appgather.rules.patterns import (
    BUNDLE_FILE_PATTERN,
    LAUNCH_IMAGE_PATTERN,
    LAUNCH_LOGO_PATTERN,
    app_icon_pattern,
    is_bundle_path,
    split_filename,
)

__all__ = [
    "BUNDLE_FILE_PATTERN",
    "LAUNCH_IMAGE_PATTERN",
    "LAUNCH_LOGO_PATTERN",
    "app_icon_pattern",
    "is_bundle_path",
    "split_filename",
]
