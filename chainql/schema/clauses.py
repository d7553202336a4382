"""Pydantic models for the fragments a QueryBuilder accumulates.

Filter conditions form a tree: a :class:`Group` owns an ordered list of
:class:`Clause` and nested :class:`Group` children.  The fluent surface is a
flat call sequence; the accumulator turns that sequence into this tree and
the tree is rendered to text only when a statement is built.

The remaining models are the ordered, tagged entries of the other clause
lists (JOIN, ORDER BY) and the two write payloads (bound and raw columns).
"""
from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

#: Boolean connective placed before a clause or group.
Connective = Literal["AND", "OR"]

#: JOIN flavours.  ``INNER`` renders as a plain ``JOIN``.
JoinType = Literal["INNER", "LEFT", "RIGHT"]

#: ORDER BY direction; ``None`` leaves the direction to the database.
Direction = Literal["ASC", "DESC"]

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class Clause(BaseModel):
    """One raw boolean condition and the values bound to its placeholders.

    Attributes:
        connective: ``AND`` / ``OR``; dropped when the clause is rendered
            first in its group.
        text: SQL condition containing zero or more ``?`` placeholders.
        values: Parameter values in placeholder order.
    """

    model_config = _FROZEN

    connective: Connective = "AND"
    text: str
    values: tuple[Any, ...] = ()


class Group(BaseModel):
    """A parenthesized nesting scope inside WHERE or HAVING.

    The root scope of an accumulator is also a ``Group``; it is rendered
    without parentheses.
    """

    model_config = ConfigDict(extra="forbid")

    connective: Connective = "AND"
    children: list[Union[Clause, Group]] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no clause exists in this group at any depth."""
        return all(
            isinstance(child, Group) and child.is_empty for child in self.children
        )


Group.model_rebuild()


class JoinFragment(BaseModel):
    """A single ``[LEFT|RIGHT] JOIN <table> ON <condition>`` entry."""

    model_config = _FROZEN

    table: str
    condition: str
    type: JoinType = "INNER"


class OrderFragment(BaseModel):
    """A single ORDER BY expression."""

    model_config = _FROZEN

    expr: str
    direction: Direction | None = None


class WriteColumn(BaseModel):
    """A quoted write column: rendered as ``?`` and bound to ``value``."""

    model_config = _FROZEN

    column: str
    value: Any = None


class RawColumn(BaseModel):
    """A raw write column: ``expr`` is inlined as literal SQL, never bound."""

    model_config = _FROZEN

    column: str
    expr: str
