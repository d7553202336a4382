"""Mutable builder state shared by the facade and the fragment builders.

Packages every accumulated fragment of one :class:`QueryBuilder` into a
single object so that fragment builders stay pure functions of it.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from chainql.compile.accumulator import ClauseAccumulator
from chainql.schema.clauses import JoinFragment, OrderFragment, RawColumn, WriteColumn


@dataclass
class BuilderState:
    """Everything a builder has accumulated so far.

    Attributes:
        table: FROM / INTO / UPDATE target (may carry an alias,
            e.g. ``"users u"``).
        select: SELECT fragments in add order (empty means ``*``).
        distinct: Emit ``SELECT DISTINCT``.
        joins: JOIN fragments in add order.
        where: WHERE condition accumulator.
        group_by: GROUP BY fragments in add order.
        having: HAVING condition accumulator.
        order_by: ORDER BY fragments in add order.
        limit: Row limit; 0 means unset.
        offset: Row offset; 0 means unset.
        values: Quoted write columns, bound as parameters.
        raw_values: Raw write columns, inlined as SQL expressions.
    """

    table: str = ""
    select: list[str] = field(default_factory=list)
    distinct: bool = False
    joins: list[JoinFragment] = field(default_factory=list)
    where: ClauseAccumulator = field(default_factory=ClauseAccumulator)
    group_by: list[str] = field(default_factory=list)
    having: ClauseAccumulator = field(default_factory=ClauseAccumulator)
    order_by: list[OrderFragment] = field(default_factory=list)
    limit: int = 0
    offset: int = 0
    values: list[WriteColumn] = field(default_factory=list)
    raw_values: list[RawColumn] = field(default_factory=list)
