"""Unit tests for Query converters (named binds, SQLAlchemy)."""
from __future__ import annotations

import sys

import pytest

from chainql.compile.base import Query
from chainql.compile.builder import QueryBuilder
from chainql.compile.converters import to_named, to_sqlalchemy
from chainql.errors import MissingDependencyError


def test_to_named_numbers_binds_in_order():
    q = QueryBuilder("users").where("age > ?", 18).where_eq("role", ["a", "b"]).read()
    statement, params = to_named(q)
    assert statement == "SELECT * FROM users WHERE age > :p0 AND role IN (:p1, :p2);"
    assert params == {"p0": 18, "p1": "a", "p2": "b"}


def test_to_named_custom_prefix():
    statement, params = to_named(Query("SELECT ?", (1,)), prefix="v")
    assert statement == "SELECT :v0;"
    assert params == {"v0": 1}


def test_to_named_rejects_empty_query():
    with pytest.raises(ValueError, match="empty"):
        to_named(QueryBuilder("t").insert_all([]))


def test_to_named_rejects_misaligned_query():
    q = QueryBuilder("t").insert_all([{"a": 1, "b": 2}, {"a": 3}])
    with pytest.raises(ValueError, match="placeholder"):
        to_named(q)


def test_missing_sqlalchemy_raises_missing_dependency(monkeypatch):
    monkeypatch.setitem(sys.modules, "sqlalchemy", None)
    with pytest.raises(MissingDependencyError) as exc_info:
        to_sqlalchemy(Query("SELECT 1"))
    assert exc_info.value.package == "sqlalchemy"
    assert isinstance(exc_info.value, ImportError)


def test_to_sqlalchemy_executes_against_sqlite():
    sqlalchemy = pytest.importorskip("sqlalchemy")
    engine = sqlalchemy.create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(sqlalchemy.text("CREATE TABLE users (id INTEGER, name TEXT)"))
        clause, params = to_sqlalchemy(
            QueryBuilder("users").insert_all([{"id": 1, "name": "ann"}, {"id": 2, "name": "bob"}])
        )
        conn.execute(clause, params)
        clause, params = to_sqlalchemy(
            QueryBuilder("users").select("name").where_eq("id", [2, 3]).read()
        )
        rows = conn.execute(clause, params).all()
    assert [r.name for r in rows] == ["bob"]


def test_to_named_leaves_literal_colons_alone():
    statement, _ = to_named(QueryBuilder("t").where("label LIKE ':tag%'").where_eq("id", 1).read())
    assert statement == "SELECT * FROM t WHERE label LIKE ':tag%' AND id = :p0;"


def test_to_sqlalchemy_keeps_literal_colons_out_of_the_binds():
    sqlalchemy = pytest.importorskip("sqlalchemy")
    clause, params = to_sqlalchemy(
        QueryBuilder("t").where("label LIKE ':tag%'").where_eq("id", 1).read()
    )
    assert list(clause.compile().params) == ["p0"]
    assert params == {"p0": 1}

    engine = sqlalchemy.create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(sqlalchemy.text("CREATE TABLE t (id INTEGER, label TEXT)"))
        conn.execute(
            sqlalchemy.text("INSERT INTO t VALUES (1, '\\:tag-a'), (1, 'plain'), (2, '\\:tag-b')")
        )
        rows = conn.execute(clause, params).all()
    assert [r.label for r in rows] == [":tag-a"]


def test_to_sqlalchemy_keeps_double_colon_casts():
    pytest.importorskip("sqlalchemy")
    clause, _ = to_sqlalchemy(QueryBuilder("t").select("id::text").where_eq("id", 1).read())
    assert list(clause.compile().params) == ["p0"]
    assert "id::text" in str(clause)
