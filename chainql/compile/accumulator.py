"""Clause accumulator: turns a flat call sequence into a boolean tree.

SQL boolean composition is a tree, but the fluent surface is a flat list of
calls (``where``, ``or_where``, ``group_start``, ``group_end`` …).  The
accumulator keeps a stack of open :class:`~chainql.schema.clauses.Group`
frames, root always present, and appends every clause to the group on top
of the stack.

Connectives are decided at render time: the first node rendered in any
group never gets a leading ``AND`` / ``OR``.  Groups that contain no clause
at any depth render nothing and do not count as a first node.

Parameters are collected during the same depth-first walk that produces the
text, so their order always matches placeholder order.
"""
from __future__ import annotations

from typing import Any, Iterable

from chainql.compile.layout import Layout
from chainql.schema.clauses import Clause, Connective, Group


class ClauseAccumulator:
    """Accumulates WHERE or HAVING conditions, including nested groups."""

    def __init__(self) -> None:
        self._root = Group()
        self._stack: list[Group] = [self._root]

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Number of currently open groups (0 at root)."""
        return len(self._stack) - 1

    @property
    def is_empty(self) -> bool:
        """True when no clause has been added at any depth."""
        return self._root.is_empty

    @property
    def root(self) -> Group:
        return self._root

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_clause(
        self,
        connective: Connective,
        text: str,
        values: Iterable[Any] = (),
    ) -> None:
        """Append a condition to the current group."""
        self._stack[-1].children.append(
            Clause(connective=connective, text=text.strip(), values=tuple(values))
        )

    def open_group(self, connective: Connective) -> None:
        """Open a nested group inside the current one."""
        group = Group(connective=connective)
        self._stack[-1].children.append(group)
        self._stack.append(group)

    def close_group(self) -> None:
        """Close the innermost open group; no-op at root."""
        if self.depth > 0:
            self._stack.pop()

    def finalize(self) -> None:
        """Close every group still open."""
        while self.depth > 0:
            self.close_group()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, layout: Layout) -> tuple[str, list[Any]]:
        """Render the condition tree.

        Returns:
            The condition text (empty when nothing was added) and the
            parameters in placeholder order.
        """
        params: list[Any] = []
        text = self._render_group(self._root, 0, layout, params)
        return text, params

    def _render_group(
        self,
        group: Group,
        depth: int,
        layout: Layout,
        params: list[Any],
    ) -> str:
        lines: list[str] = []
        for child in group.children:
            if isinstance(child, Group):
                if child.is_empty:
                    continue
                body = self._render_group(child, depth + 1, layout, params)
                text = layout.parenthesize(body, depth)
            else:
                text = child.text
                params.extend(child.values)
            if lines:
                text = f"{child.connective} {text}"
            lines.append(layout.condition(text, depth))
        return layout.conditions(lines)
