"""The Query result type.

``Query`` is the only thing a :class:`~chainql.compile.builder.QueryBuilder`
produces: finished statement text plus the positional parameters bound to
its ``?`` placeholders, in placeholder order.  Execution layers prepare
``statement`` and bind ``parameters`` as-is::

    query = QueryBuilder("users").where_eq("status", "active").read()
    cursor.execute(query.statement, query.parameters)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Query:
    """An immutable ``(statement, parameters)`` pair.

    The statement is stripped of surrounding whitespace and of any trailing
    ``;`` characters, then terminated with exactly one ``;``.  The one
    exception is the inert empty query returned for an empty batch insert,
    whose statement is ``""``; check :attr:`is_empty` before executing
    batch results.

    Attributes:
        statement: SQL text using positional ``?`` placeholders.
        parameters: Values for the placeholders, in order.
    """

    statement: str = ""
    parameters: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        text = self.statement.strip().rstrip(";").rstrip()
        object.__setattr__(self, "statement", f"{text};" if text else "")
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def __str__(self) -> str:
        return self.statement

    @property
    def is_empty(self) -> bool:
        """True for the inert query produced by an empty batch insert."""
        return not self.statement

    @property
    def placeholder_count(self) -> int:
        """Number of ``?`` markers in the statement.

        Counts every ``?`` character, including any inside string literals
        of raw SQL fragments.
        """
        return self.statement.count("?")

    def interpolate(self) -> str:
        """Return the statement with each parameter substituted inline.

        Strings are single-quoted with embedded quotes doubled and ``None``
        renders as ``NULL``.  Meant for logs and debugging only: the result
        is never safe to execute.
        """
        parts = self.statement.split("?")
        out = [parts[0]]
        for index, part in enumerate(parts[1:]):
            if index < len(self.parameters):
                out.append(_literal(self.parameters[index]))
            else:
                out.append("?")
            out.append(part)
        return "".join(out)


def _literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, str):
        escaped = value.replace("'", "''")
        return f"'{escaped}'"
    return str(value)
