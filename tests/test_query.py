"""Unit tests for the Query result type."""
from __future__ import annotations

import dataclasses

import pytest

from chainql.compile.base import Query


@pytest.mark.parametrize(
    "raw",
    ["SELECT 1", "SELECT 1;", "  SELECT 1;;  ", "\nSELECT 1 ;\n"],
)
def test_statement_ends_with_exactly_one_terminator(raw):
    assert Query(raw).statement == "SELECT 1;"


def test_blank_statement_stays_empty():
    q = Query("   ")
    assert q.statement == ""
    assert q.is_empty
    assert not Query("SELECT 1").is_empty


def test_parameters_are_stored_as_a_tuple():
    q = Query("SELECT * FROM t WHERE a = ?", [1])
    assert q.parameters == (1,)
    assert Query().parameters == ()


def test_query_is_immutable():
    q = Query("SELECT 1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        q.statement = "SELECT 2"  # type: ignore[misc]


def test_str_is_the_statement():
    assert str(Query("SELECT 1")) == "SELECT 1;"


def test_placeholder_count():
    assert Query("SELECT * FROM t WHERE a = ? AND b IN (?, ?)", (1, 2, 3)).placeholder_count == 3


def test_interpolate_quotes_values_for_display():
    q = Query(
        "SELECT * FROM t WHERE a = ? AND b IS ? AND c = ? AND d = ?",
        ("O'Neil", None, 3, 1.5),
    )
    assert q.interpolate() == (
        "SELECT * FROM t WHERE a = 'O''Neil' AND b IS NULL AND c = 3 AND d = 1.5;"
    )


def test_interpolate_leaves_unbound_markers():
    assert Query("SELECT ? + ?", (1,)).interpolate() == "SELECT 1 + ?;"
    assert Query("SELECT 1").interpolate() == "SELECT 1;"
