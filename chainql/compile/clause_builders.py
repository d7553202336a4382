"""Clause-level SQL builders.

Each class renders exactly one statement section from a
:class:`~chainql.compile.state.BuilderState` and returns ``""`` when the
section is absent.  None of them mutate the state, except that the WHERE
and HAVING builders close any group left open before rendering.

Read pipeline order (used by every read-shaped statement)::

    SELECT → FROM → JOIN → WHERE → GROUP BY → HAVING → ORDER BY → LIMIT

Classes
-------
SelectClauseBuilder   ``SELECT [DISTINCT] <cols>`` / ``SELECT COUNT(*) AS …``
FromClauseBuilder     ``FROM <table>``
JoinClauseBuilder     ``[LEFT|RIGHT] JOIN … ON …``
WhereClauseBuilder    ``WHERE <conditions>`` plus its parameters
GroupByClauseBuilder  ``GROUP BY <cols>``
HavingClauseBuilder   ``HAVING <conditions>`` plus its parameters
OrderByClauseBuilder  ``ORDER BY <expr> [ASC|DESC]``
LimitClauseBuilder    ``LIMIT n [OFFSET m]``
SetClauseBuilder      ``SET col = ?, col = <expr>`` (UPDATE)
InsertClauseBuilder   ``<verb> INTO t (cols) VALUES (…)``
BatchValuesBuilder    ``<verb> INTO t (cols) VALUES (…), (…)``
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from chainql.compile.accumulator import ClauseAccumulator
from chainql.compile.layout import Layout
from chainql.compile.state import BuilderState


class SelectClauseBuilder:
    """Builds the ``SELECT [DISTINCT] …`` clause."""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState) -> str:
        keyword = "SELECT DISTINCT" if state.distinct else "SELECT"
        return self._layout.listing(keyword, state.select or ["*"])

    def build_count(self, label: str) -> str:
        return self._layout.listing("SELECT", [f"COUNT(*) AS {label}"])


class FromClauseBuilder:
    """Builds the ``FROM <table>`` fragment."""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState) -> str:
        return f"FROM {state.table}" if state.table else ""


class JoinClauseBuilder:
    """Builds every ``JOIN … ON …`` fragment, in add order."""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState) -> str:
        parts = []
        for join in state.joins:
            keyword = "JOIN" if join.type == "INNER" else f"{join.type} JOIN"
            parts.append(f"{keyword} {join.table} ON {join.condition}")
        return self._layout.sections(parts)


class _PredicateClauseBuilder(ABC):
    """Shared WHERE / HAVING rendering."""

    keyword = ""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    @abstractmethod
    def _accumulator(self, state: BuilderState) -> ClauseAccumulator:
        """Return the accumulator this section renders."""

    def build(self, state: BuilderState) -> tuple[str, list[Any]]:
        """Return the rendered section and its parameters in order."""
        accumulator = self._accumulator(state)
        accumulator.finalize()
        body, params = accumulator.render(self._layout)
        if not body:
            return "", []
        return self._layout.predicate(self.keyword, body), params


class WhereClauseBuilder(_PredicateClauseBuilder):
    """Builds ``WHERE …``."""

    keyword = "WHERE"

    def _accumulator(self, state: BuilderState) -> ClauseAccumulator:
        return state.where


class HavingClauseBuilder(_PredicateClauseBuilder):
    """Builds ``HAVING …``."""

    keyword = "HAVING"

    def _accumulator(self, state: BuilderState) -> ClauseAccumulator:
        return state.having


class GroupByClauseBuilder:
    """Builds ``GROUP BY …``."""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState) -> str:
        if not state.group_by:
            return ""
        return self._layout.listing("GROUP BY", state.group_by)


class OrderByClauseBuilder:
    """Builds ``ORDER BY …``."""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState) -> str:
        if not state.order_by:
            return ""
        items = [
            f"{o.expr} {o.direction}" if o.direction else o.expr
            for o in state.order_by
        ]
        return self._layout.listing("ORDER BY", items)


class LimitClauseBuilder:
    """Builds ``LIMIT n [OFFSET m]``; OFFSET is dropped when it is 0."""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState) -> str:
        if not state.limit:
            return ""
        sql = f"LIMIT {state.limit}"
        if state.offset:
            sql += f" OFFSET {state.offset}"
        return sql


class SetClauseBuilder:
    """Builds the UPDATE ``SET`` list: quoted columns first, then raw ones."""

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState) -> str:
        pairs = [f"{c.column} = ?" for c in state.values]
        pairs += [f"{c.column} = {c.expr}" for c in state.raw_values]
        if not pairs:
            return "SET"
        return self._layout.listing("SET", pairs)


class InsertClauseBuilder:
    """Builds a single-row ``INSERT`` / ``REPLACE`` statement body.

    Quoted columns come first with one ``?`` each, then raw columns with
    their expressions inlined.
    """

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(self, state: BuilderState, verb: str) -> str:
        columns = [c.column for c in state.values] + [c.column for c in state.raw_values]
        values = ["?" for _ in state.values] + [c.expr for c in state.raw_values]
        layout = self._layout
        return layout.sections(
            [
                layout.head(f"{verb} INTO", f"{state.table} {layout.columns(columns)}"),
                f"VALUES {layout.columns(values)}",
            ]
        )


class BatchValuesBuilder:
    """Builds a multi-row ``INSERT`` / ``REPLACE`` statement.

    The column list comes from the first record's keys.  Every record must
    carry the same key set; records that do not produce a statement whose
    rows do not match the column list (the builder does not check).
    """

    def __init__(self, layout: Layout) -> None:
        self._layout = layout

    def build(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
        verb: str,
    ) -> tuple[str, list[Any]]:
        """Return the statement text and the row-major parameters."""
        if not rows:
            return "", []
        columns = list(rows[0].keys())
        row_sql = self._layout.row("?" for _ in columns)
        params: list[Any] = []
        row_parts: list[str] = []
        for row in rows:
            row_parts.append(row_sql)
            params.extend(row.values())
        sql = self._layout.sections(
            [
                f"{verb} INTO {table} {self._layout.row(columns)}",
                self._layout.listing("VALUES", row_parts),
            ]
        )
        return sql, params
