"""Filename patterns used to classify files.

All patterns are compiled once at import time and matched against the bare
filename (or, for bundle detection, against the relative path). They follow
the iOS packaging naming conventions:

- Launch images: Default[-Landscape|-Portrait][-<height>h][@<n>x].png
- Launch logos: LaunchLogo[@2x|@3x][~iphone|~ipad].(png|jpg)
- Bundle contents: any path with a directory segment ending in ".bundle/"
"""

import re
from typing import Optional, Tuple

# Patterns end in \Z so a trailing newline stays part of the name. re.ASCII
# limits \w to [A-Za-z0-9_]; a suffix with non-ASCII letters is not an extension.
FILENAME_PATTERN: re.Pattern[str] = re.compile(r"^(.*)\.(\w+)\Z", re.ASCII)

LAUNCH_IMAGE_PATTERN: re.Pattern[str] = re.compile(
    r"^(Default(-(Landscape|Portrait))?(-[0-9]+h)?(@[2-9]x)?)\.png\Z"
)

LAUNCH_LOGO_PATTERN: re.Pattern[str] = re.compile(
    r"^LaunchLogo(?:@(?P<scale>[23])x)?(?:~(?P<device>iphone|ipad))?\.(?:png|jpg)\Z"
)

BUNDLE_FILE_PATTERN: re.Pattern[str] = re.compile(r".+\.bundle/.+")


def split_filename(filename: str) -> Tuple[str, Optional[str]]:
    """Split *filename* on its last dot.

    Args:
        filename: Bare filename, e.g. "icon-60@2x.png".

    Returns:
        (name, extension). The extension is lowercased, or None when the
        filename has no word-character suffix after a dot.

    Example:
        >>> split_filename("Default@2x.PNG")
        ('Default@2x', 'png')
        >>> split_filename("LICENSE")
        ('LICENSE', None)
    """
    m = FILENAME_PATTERN.match(filename)
    if not m:
        return filename, None
    return m.group(1), m.group(2).lower()


def app_icon_pattern(app_icon: Optional[str]) -> Optional[re.Pattern[str]]:
    """Derive the root-level app icon pattern from the configured icon filename.

    The icon's base name (without extension) is escaped and followed by a
    captured free-form suffix and ".png", so "appicon.png" matches
    "appicon.png", "appicon@2x.png", "appicon-60@3x.png" and so on.

    Args:
        app_icon: Configured icon filename, or None.

    Returns:
        The compiled pattern, or None when no icon is configured or the name has
        no extension.
    """
    if not app_icon:
        return None
    m = FILENAME_PATTERN.match(app_icon)
    if not m:
        return None
    return re.compile("^" + re.escape(m.group(1)) + r"(?P<tag>.*)\.png\Z")


def is_bundle_path(rel_path: str) -> bool:
    """Return True when *rel_path* lies inside a ``*.bundle`` directory."""
    return BUNDLE_FILE_PATTERN.search(rel_path) is not None
