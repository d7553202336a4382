"""Whitespace layout for rendered statements.

Every fragment builder renders through a :class:`Layout`, so the grouping
algorithm and the clause order never depend on how the text is spaced.  Two
layouts exist: compact (single line, the default) and pretty (one section
keyword per line, list items and conditions indented, one extra indent
level per group depth).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from chainql.schema.profile import RenderProfile


@dataclass(frozen=True)
class Layout:
    """Joins and indents statement pieces for one render run.

    Attributes:
        pretty: Multi-line output when ``True``.
        indent: Indent unit for the multi-line output.
    """

    pretty: bool = False
    indent: str = "\t"

    @classmethod
    def from_profile(cls, profile: RenderProfile) -> "Layout":
        return cls(pretty=profile.pretty, indent=profile.indent)

    # ------------------------------------------------------------------
    # Statement level
    # ------------------------------------------------------------------

    def sections(self, parts: Iterable[str]) -> str:
        """Join the non-empty statement sections in order."""
        sep = "\n" if self.pretty else " "
        return sep.join(part for part in parts if part)

    def head(self, keyword: str, body: str) -> str:
        """``KEYWORD body`` with the body on its own indented line when pretty."""
        if self.pretty:
            return f"{keyword}\n{self.indent}{body}"
        return f"{keyword} {body}"

    def listing(self, keyword: str, items: Iterable[str]) -> str:
        """``KEYWORD a, b, c`` with one item per line when pretty."""
        sep = f",\n{self.indent}" if self.pretty else ", "
        return self.head(keyword, sep.join(items))

    def columns(self, items: Iterable[str]) -> str:
        """A parenthesized column or value list for INSERT statements."""
        if self.pretty:
            inner = f",\n{self.indent * 2}".join(items)
            return f"(\n{self.indent * 2}{inner}\n{self.indent})"
        return self.row(items)

    @staticmethod
    def row(items: Iterable[str]) -> str:
        """A parenthesized list that always stays on one line."""
        return f"({', '.join(items)})"

    def derived(self, body: str) -> str:
        """Wrap a whole statement so it can be used as a derived table."""
        if self.pretty:
            return f"(\n{body}\n)"
        return f"({body})"

    # ------------------------------------------------------------------
    # Conditions (WHERE / HAVING)
    # ------------------------------------------------------------------

    def predicate(self, keyword: str, body: str) -> str:
        """``WHERE <conditions>``; ``body`` is already indented when pretty."""
        sep = "\n" if self.pretty else " "
        return f"{keyword}{sep}{body}"

    def condition(self, text: str, depth: int) -> str:
        if self.pretty:
            return f"{self.indent * (depth + 1)}{text}"
        return text

    def conditions(self, lines: list[str]) -> str:
        sep = "\n" if self.pretty else " "
        return sep.join(lines)

    def parenthesize(self, body: str, depth: int) -> str:
        """Close a group opened at ``depth`` around its rendered ``body``."""
        if self.pretty:
            return f"(\n{body}\n{self.indent * (depth + 1)})"
        return f"({body})"
