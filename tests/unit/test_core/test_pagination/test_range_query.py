"""Unit tests for keyset range query construction."""
from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import sqlite

from keyset_relay.core.pagination import (
    ConversionError,
    CursorCodec,
    CursorDecodeError,
    Direction,
    RangeQueryPlan,
    UuidTimestampExtractor,
    build_range_query,
    seek_predicate,
)
from tests.models import Todo

ANCHOR_ID = uuid.UUID("6a45fd71-cc32-4eeb-823e-e8ef08ecd004")
ANCHOR_AT = datetime(2020, 1, 1, 0, 0, 0, 10_000, tzinfo=UTC)
ANCHOR = CursorCodec.encode(str(ANCHOR_ID), ANCHOR_AT.isoformat())


def compile_sql(statement) -> str:
    return str(statement.compile(dialect=sqlite.dialect()))


@pytest.mark.unit
class TestSeekPredicate:
    """Tests for the composite seek predicate."""

    def test_forward_is_strictly_greater(self):
        predicate = seek_predicate(Todo.created_at, Todo.id, ANCHOR_AT, ANCHOR_ID, Direction.FORWARD)
        sql = compile_sql(predicate)

        assert "todos.created_at > ?" in sql
        assert "todos.created_at = ?" in sql
        assert "todos.id > ?" in sql
        assert " OR " in sql

    def test_backward_is_strictly_less(self):
        predicate = seek_predicate(Todo.created_at, Todo.id, ANCHOR_AT, ANCHOR_ID, Direction.BACKWARD)
        sql = compile_sql(predicate)

        assert "todos.created_at < ?" in sql
        assert "todos.id < ?" in sql
        assert ">" not in sql

    def test_binds_anchor_values(self):
        predicate = seek_predicate(Todo.created_at, Todo.id, ANCHOR_AT, ANCHOR_ID, Direction.FORWARD)
        params = predicate.compile(dialect=sqlite.dialect()).params

        assert sorted(params.values(), key=str) == sorted(
            [ANCHOR_AT, ANCHOR_AT, ANCHOR_ID], key=str
        )


@pytest.mark.unit
class TestBuildRangeQuery:
    """Tests for build_range_query."""

    def test_forward_without_anchor(self):
        plan = RangeQueryPlan(Direction.FORWARD, limit=2)
        query = build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)

        assert query.where is None
        assert query.limit == 3

        sql = compile_sql(query.apply(select(Todo)))
        assert "WHERE" not in sql
        assert "ORDER BY todos.created_at ASC, todos.id ASC" in sql
        assert "LIMIT" in sql

    def test_backward_without_anchor_orders_descending(self):
        plan = RangeQueryPlan(Direction.BACKWARD, limit=5)
        query = build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)

        assert query.limit == 6
        assert "ORDER BY todos.created_at DESC, todos.id DESC" in compile_sql(query.apply(select(Todo)))

    def test_forward_with_anchor(self):
        plan = RangeQueryPlan(Direction.FORWARD, limit=2, anchor=ANCHOR)
        query = build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)

        assert query.where is not None
        sql = compile_sql(query.apply(select(Todo)))
        assert "WHERE todos.created_at > ?" in sql
        assert "todos.id > ?" in sql

    def test_backward_with_anchor(self):
        plan = RangeQueryPlan(Direction.BACKWARD, limit=2, anchor=ANCHOR)
        query = build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)

        sql = compile_sql(query.apply(select(Todo)))
        assert "WHERE todos.created_at < ?" in sql
        assert "ORDER BY todos.created_at DESC, todos.id DESC" in sql

    def test_apply_keeps_existing_filters(self):
        plan = RangeQueryPlan(Direction.FORWARD, limit=2, anchor=ANCHOR)
        query = build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)

        sql = compile_sql(query.apply(select(Todo).where(Todo.text == "milk")))

        assert "todos.text = ?" in sql
        assert "todos.created_at > ?" in sql

    def test_undecodable_anchor(self):
        plan = RangeQueryPlan(Direction.FORWARD, limit=2, anchor="***")

        with pytest.raises(CursorDecodeError):
            build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)

    @pytest.mark.parametrize(
        ("key", "order", "field"),
        [
            ("not-a-uuid", ANCHOR_AT.isoformat(), "id"),
            (str(ANCHOR_ID), "yesterday", "created_at"),
        ],
    )
    def test_unconvertible_anchor(self, key: str, order: str, field: str):
        plan = RangeQueryPlan(Direction.BACKWARD, limit=2, anchor=CursorCodec.encode(key, order))

        with pytest.raises(ConversionError) as exc_info:
            build_range_query(plan, UuidTimestampExtractor(), Todo.id, Todo.created_at)

        assert exc_info.value.field == field
