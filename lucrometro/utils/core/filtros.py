# lucrometro/utils/core/filtros.py
from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Tuple, TypeVar
from zoneinfo import ZoneInfo

from lucrometro.config.paths import APP_TIMEZONE

__all__ = [
    "Periodo",
    "QUERY_PRESETS",
    "PRESETS_EXIBICAO",
    "parse_iso",
    "day_bounds",
    "resolve_timeframe",
    "format_range",
    "orders_between",
]

logger = logging.getLogger(__name__)

QUERY_PRESETS: Tuple[str, ...] = (
    "Today",
    "Yesterday",
    "Last 7 Days",
    "Last 30 Days",
    "This Month",
    "This Year",
)

# Presets só de exibição: resolvem para o ano corrente.
PRESETS_EXIBICAO: Tuple[str, ...] = QUERY_PRESETS + (
    "Last 90 Days",
    "Last 365 Days",
    "Last Month",
    "Last Week",
    "This Week",
    "This Quarter",
    "Last Year",
)

RANGE_FORMAT = "%d/%m/%Y"
_RANGE_RE = re.compile(r"^\s*(.+?)\s*-\s*(.+?)\s*$")
_END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class Periodo:
    """Intervalo fechado [start, end] em instantes UTC."""
    label: str
    start: datetime
    end: datetime
    tz_name: str = APP_TIMEZONE
    fallback: bool = False

    def start_local(self) -> datetime:
        return self.start.astimezone(ZoneInfo(self.tz_name))

    def end_local(self) -> datetime:
        return self.end.astimezone(ZoneInfo(self.tz_name))

    def as_query_bounds(self) -> Tuple[str, str]:
        """ISO8601 com offset do fuso do negócio (ex.: '2024-03-15T00:00:00-03:00')."""
        return (self.start_local().isoformat(timespec="seconds"),
                self.end_local().isoformat(timespec="seconds"))

    def as_dates(self) -> Tuple[str, str]:
        """Par YYYY-MM-DD no fuso do negócio."""
        return (self.start_local().date().isoformat(), self.end_local().date().isoformat())

    def contains(self, dt: Optional[datetime]) -> bool:
        return dt is not None and self.start <= dt <= self.end


# ---------- PARSE ISO ----------
def parse_iso(s: Optional[str]) -> Optional[datetime]:
    """Converte ISO (aceita Z e milisseg.) em datetime tz-aware; assume UTC se naive."""
    if not s:
        return None
    s = str(s).strip().replace("Z", "+00:00")
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        try:
            if len(s) >= 6 and s[-6] in "+-":
                dt = datetime.fromisoformat(s.split(".")[0] + s[-6:])
            else:
                dt = datetime.fromisoformat(s.split(".")[0])
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


# ---------- BOUNDS ----------
def day_bounds(start_date: date, end_date: date, tz_name: str = APP_TIMEZONE) -> Tuple[datetime, datetime]:
    """Início do primeiro dia (00:00:00.000) e fim do último (23:59:59.999), em UTC."""
    tz = ZoneInfo(tz_name)
    start = datetime.combine(start_date, time.min, tzinfo=tz)
    end = datetime.combine(end_date, _END_OF_DAY, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def _local_today(now: Optional[datetime], tz: ZoneInfo) -> date:
    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    return now.astimezone(tz).date()


def _year_dates(today: date) -> Tuple[date, date]:
    return date(today.year, 1, 1), date(today.year, 12, 31)


def _preset_dates(preset: str, today: date) -> Optional[Tuple[date, date]]:
    if preset == "Today":
        return today, today
    if preset == "Yesterday":
        y = today - timedelta(days=1)
        return y, y
    if preset == "Last 7 Days":
        return today - timedelta(days=6), today
    if preset == "Last 30 Days":
        return today - timedelta(days=29), today
    if preset == "This Month":
        last = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last)
    if preset == "This Year":
        return _year_dates(today)
    return None


def _parse_range(timeframe: str) -> Tuple[date, date]:
    m = _RANGE_RE.match(timeframe)
    if not m:
        raise ValueError(f"Formato de intervalo inválido: {timeframe!r}")
    ini = datetime.strptime(m.group(1), RANGE_FORMAT).date()
    fim = datetime.strptime(m.group(2), RANGE_FORMAT).date()
    return ini, fim


def resolve_timeframe(timeframe: str, now: Optional[datetime] = None,
                      tz_name: str = APP_TIMEZONE) -> Periodo:
    """
    Converte o seletor de período do painel em [start, end] (UTC).

    Aceita um preset (QUERY_PRESETS) ou o literal "dd/MM/yyyy - dd/MM/yyyy".
    Literal inválido NÃO levanta erro: cai no ano corrente inteiro
    (fallback=True). Presets apenas de exibição e valores desconhecidos
    também resolvem para o ano corrente.
    """
    tz = ZoneInfo(tz_name)
    today = _local_today(now, tz)
    label = (timeframe or "").strip()
    fallback = False

    dates = _preset_dates(label, today)
    if dates is None and "-" in label:
        try:
            dates = _parse_range(label)
        except ValueError as e:
            logger.warning("Período inválido %r (%s); usando o ano corrente", timeframe, e)
            fallback = True
    if dates is None:
        dates = _year_dates(today)

    start, end = day_bounds(dates[0], dates[1], tz_name)
    return Periodo(label=label, start=start, end=end, tz_name=tz_name, fallback=fallback)


def format_range(start_date: date, end_date: date) -> str:
    """Monta o literal aceito por resolve_timeframe."""
    return f"{start_date.strftime(RANGE_FORMAT)} - {end_date.strftime(RANGE_FORMAT)}"


# ---------- FILTERS ----------
T = TypeVar("T")

def orders_between(orders: Iterable[T], start: datetime, end: datetime) -> List[T]:
    """
    Filtro inclusivo [start..end] pela data de criação.
    Aceita objetos com `.created_at` ou dicts com "created_at".
    """
    out: List[T] = []
    for o in orders:
        raw = o.get("created_at") if isinstance(o, dict) else getattr(o, "created_at", None)
        dt = raw if isinstance(raw, datetime) else parse_iso(raw)
        if dt and start <= dt <= end:
            out.append(o)
    return out
