"""Pydantic model for the RenderProfile that controls statement layout.

The profile never changes what a statement means or the order of its
parameters; it only controls whitespace and the two names ``count()``
introduces::

    from chainql import QueryBuilder, RenderProfile

    # Default: single-line statements
    QueryBuilder("users").where_eq("id", 7).read().statement
    # 'SELECT * FROM users WHERE id = ?;'

    # Multi-line statements, one indent level per group depth
    profile = RenderProfile.pretty_print(indent="    ")
    QueryBuilder("users", profile=profile).where_eq("id", 7).read().statement
    # 'SELECT\\n    *\\nFROM users\\nWHERE\\n    id = ?;'
"""
from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, model_validator

from chainql.errors import ProfileConfigError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class RenderProfile(BaseModel):
    """Layout options for every statement a builder produces.

    Attributes:
        pretty: Emit one section keyword per line with indented list items
            and conditions.  ``False`` emits single-line statements.
        indent: Indent unit used by the pretty layout.
        count_label: Column alias of the ``COUNT(*)`` projection.
        count_alias: Derived-table alias used when ``count()`` wraps a
            grouped statement.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pretty: bool = False
    indent: str = "\t"
    count_label: str = "total"
    count_alias: str = "counted"

    @classmethod
    def compact(cls) -> "RenderProfile":
        """Return the default single-line profile."""
        return cls()

    @classmethod
    def pretty_print(cls, indent: str = "\t") -> "RenderProfile":
        """Return a multi-line profile using ``indent`` per nesting level."""
        return cls(pretty=True, indent=indent)

    @model_validator(mode="after")
    def _check(self) -> "RenderProfile":
        """Raise :class:`ProfileConfigError` for unusable settings.

        Rules
        -----
        ``indent`` must be non-empty whitespace
            Anything else would be emitted into the SQL text itself.

        ``count_label`` / ``count_alias`` must be plain identifiers
            They are written into the statement unquoted.
        """
        if not self.indent or self.indent.strip():
            raise ProfileConfigError(
                f"indent must be non-empty whitespace, got {self.indent!r}.",
                field="indent",
                reason="The indent unit is written verbatim into the statement.",
            )
        for name in ("count_label", "count_alias"):
            value = getattr(self, name)
            if not _IDENTIFIER.match(value):
                raise ProfileConfigError(
                    f"{name} must be a plain SQL identifier, got {value!r}.",
                    field=name,
                    reason="Count names are emitted unquoted.",
                )
        return self
