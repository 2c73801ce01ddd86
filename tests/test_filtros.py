from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from conftest import SP
from lucrometro.utils.core.filtros import (
    Periodo,
    day_bounds,
    format_range,
    orders_between,
    parse_iso,
    resolve_timeframe,
)


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_today_covers_full_local_day(now_sp):
    p = resolve_timeframe("Today", now=now_sp)
    assert p.start == _utc(2024, 3, 15, 3, 0, 0)
    assert p.end == _utc(2024, 3, 16, 2, 59, 59, 999000)
    assert p.fallback is False
    assert p.as_query_bounds() == ("2024-03-15T00:00:00-03:00", "2024-03-15T23:59:59-03:00")
    assert p.as_dates() == ("2024-03-15", "2024-03-15")


@pytest.mark.parametrize(
    "preset, ini, fim",
    [
        ("Yesterday", date(2024, 3, 14), date(2024, 3, 14)),
        ("Last 7 Days", date(2024, 3, 9), date(2024, 3, 15)),
        ("Last 30 Days", date(2024, 2, 15), date(2024, 3, 15)),
        ("This Month", date(2024, 3, 1), date(2024, 3, 31)),
        ("This Year", date(2024, 1, 1), date(2024, 12, 31)),
    ],
)
def test_presets(now_sp, preset, ini, fim):
    p = resolve_timeframe(preset, now=now_sp)
    assert (p.start, p.end) == day_bounds(ini, fim)
    assert p.label == preset


def test_literal_range():
    p = resolve_timeframe("15/03/2024 - 20/03/2024", now=datetime(2024, 6, 1, tzinfo=SP))
    assert p.start == _utc(2024, 3, 15, 3, 0, 0)
    assert p.end == _utc(2024, 3, 21, 2, 59, 59, 999000)
    assert p.fallback is False


@pytest.mark.parametrize("tf", ["not-a-date - also-not", "31/02/2024 - 05/03/2024", "2024-03-01 - 2024-03-05"])
def test_invalid_literal_falls_back_to_current_year(now_sp, tf):
    p = resolve_timeframe(tf, now=now_sp)
    assert (p.start, p.end) == day_bounds(date(2024, 1, 1), date(2024, 12, 31))
    assert p.fallback is True


@pytest.mark.parametrize("tf", ["Last 90 Days", "This Quarter", "qualquer coisa", ""])
def test_display_only_and_unknown_resolve_to_year(now_sp, tf):
    p = resolve_timeframe(tf, now=now_sp)
    assert (p.start, p.end) == day_bounds(date(2024, 1, 1), date(2024, 12, 31))
    assert p.fallback is False


def test_now_uses_business_timezone():
    # 01:00 UTC do dia 15 ainda é dia 14 em São Paulo
    p = resolve_timeframe("Today", now=_utc(2024, 3, 15, 1, 0))
    assert p.as_dates() == ("2024-03-14", "2024-03-14")
    # naive é interpretado no fuso do negócio
    p = resolve_timeframe("Today", now=datetime(2024, 3, 15, 1, 0))
    assert p.as_dates() == ("2024-03-15", "2024-03-15")


def test_format_range_roundtrips_through_resolver(now_sp):
    tf = format_range(date(2024, 1, 5), date(2024, 1, 7))
    assert tf == "05/01/2024 - 07/01/2024"
    assert resolve_timeframe(tf, now=now_sp).as_dates() == ("2024-01-05", "2024-01-07")


def test_parse_iso_variants():
    assert parse_iso("2024-03-15T10:00:00Z") == _utc(2024, 3, 15, 10)
    assert parse_iso("2024-03-15T10:00:00-03:00") == _utc(2024, 3, 15, 13)
    assert parse_iso("2024-03-15T10:00:00") == _utc(2024, 3, 15, 10)
    assert parse_iso("") is None
    assert parse_iso("ontem") is None


def test_orders_between_is_inclusive():
    start, end = _utc(2024, 3, 15, 3), _utc(2024, 3, 16, 2, 59, 59, 999000)
    rows = [
        {"id": 1, "created_at": "2024-03-15T03:00:00Z"},
        {"id": 2, "created_at": "2024-03-16T02:59:59.999Z"},
        {"id": 3, "created_at": "2024-03-16T03:00:00Z"},
        {"id": 4, "created_at": None},
    ]
    assert [r["id"] for r in orders_between(rows, start, end)] == [1, 2]


def test_periodo_contains():
    p = Periodo(label="x", start=_utc(2024, 1, 1), end=_utc(2024, 1, 2))
    assert p.contains(_utc(2024, 1, 1, 12))
    assert not p.contains(_utc(2024, 1, 3))
    assert not p.contains(None)
