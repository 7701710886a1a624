"""Markup analyzers used to find scripts referenced by HTML files."""

from appgather.markup.base import MarkupAnalyzer
from appgather.markup.html import HtmlScriptAnalyzer

__all__ = ["MarkupAnalyzer", "HtmlScriptAnalyzer"]
