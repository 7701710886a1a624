"""HTML script reference analyzer.

Parses an HTML document with BeautifulSoup and returns the local scripts it
loads through ``<script src="...">``. Remote scripts (http, https, any other
scheme, protocol-relative "//host/..." URLs) and data URIs are ignored, since
they are not part of the packaged tree.

Resolution rules:
- "app://foo.js" and "/foo.js" resolve from the root of the walked tree.
- Any other source resolves against the HTML file's own relative directory.
- Query strings and fragments are dropped; "." and ".." segments are
  normalised. Sources that escape the root are ignored.
"""

import logging
import posixpath
from pathlib import Path
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from appgather.markup.base import MarkupAnalyzer

logger = logging.getLogger(__name__)

APP_SCHEME = "app"


def resolve_script_src(src: str, relative_base_dir: str) -> str | None:
    """Resolve a script *src* attribute to a relative path in the walked tree.

    Args:
        src: Raw value of the src attribute.
        relative_base_dir: Relative directory of the referencing HTML file.

    Returns:
        The normalised relative path, or None when the script is not local.

    Example:
        >>> resolve_script_src("js/app.js?v=2", "www")
        'www/js/app.js'
        >>> resolve_script_src("app://lib/ti.js", "www")
        'lib/ti.js'
        >>> resolve_script_src("https://cdn.example.com/x.js", "") is None
        True
    """
    src = src.strip()
    if not src:
        return None
    parts = urlsplit(src)
    if parts.scheme and parts.scheme.lower() != APP_SCHEME:
        return None
    if not parts.scheme and parts.netloc:
        # protocol-relative "//host/x.js"
        return None

    if parts.scheme:
        # app://foo/bar.js parses "foo" as the netloc
        path = posixpath.join(parts.netloc, parts.path.lstrip("/"))
    elif parts.path.startswith("/"):
        path = parts.path.lstrip("/")
    else:
        path = posixpath.join(relative_base_dir, parts.path)

    if not path:
        return None
    normalised = posixpath.normpath(path)
    if normalised == "." or normalised.startswith("../") or normalised == "..":
        return None
    return normalised


class HtmlScriptAnalyzer(MarkupAnalyzer):
    """Find local scripts referenced by an HTML file."""

    def __init__(self, parser: str = "html.parser", encoding: str = "utf-8") -> None:
        """Initialize the analyzer.

        Args:
            parser: BeautifulSoup tree builder to use.
            encoding: Encoding used to read HTML files; undecodable bytes are
                replaced.
        """
        self.parser = parser
        self.encoding = encoding

    def analyze_markup(self, markup: str, relative_base_dir: str) -> list[str]:
        """Return local scripts referenced by an HTML string, in document order."""
        soup = BeautifulSoup(markup, self.parser)
        scripts: list[str] = []
        for tag in soup.find_all("script", src=True):
            resolved = resolve_script_src(str(tag["src"]), relative_base_dir)
            if resolved is not None and resolved not in scripts:
                scripts.append(resolved)
        return scripts

    def analyze(self, file_path: Path, relative_base_dir: str) -> list[str]:
        """Read *file_path* and return the local scripts it references."""
        markup = file_path.read_text(encoding=self.encoding, errors="replace")
        scripts = self.analyze_markup(markup, relative_base_dir)
        logger.debug("%s references %d local script(s)", file_path, len(scripts))
        return scripts
