# lucrometro/utils/vendas/shopify/service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Union

from lucrometro.config.paths import APP_TIMEZONE, Fonte, SHOPIFY_ORDERS_LIMIT
from lucrometro.utils.core.errors import MalformedResponse
from lucrometro.utils.core.filtros import Periodo, orders_between
from lucrometro.utils.custos.schema import CostTables
from .aggregator import MetricsSummary, summarize
from .schema import ORDER_FIELDS, Order, order_from_payload

__all__ = ["OrdersGateway", "build_orders_filter", "fetch_orders", "aggregate"]

logger = logging.getLogger(__name__)


class OrdersGateway(Protocol):
    """Quem busca pedidos (worker de borda ou Admin API). Paginação/retry são dele."""

    def get_orders(self, filters: Dict[str, Any]) -> Dict[str, Any]:
        ...


def build_orders_filter(periodo: Periodo, *, limit: int = SHOPIFY_ORDERS_LIMIT) -> Dict[str, Any]:
    created_min, created_max = periodo.as_query_bounds()
    return {
        "created_at_min": created_min,
        "created_at_max": created_max,
        "status": "any",
        "limit": limit,
        "fields": ORDER_FIELDS,
    }


def fetch_orders(gateway: OrdersGateway, periodo: Periodo, *, limit: int = SHOPIFY_ORDERS_LIMIT) -> List[Order]:
    """
    Busca os pedidos da janela e refaz o filtro por created_at localmente
    (o filtro do gateway não é tratado como exato).
    """
    payload = gateway.get_orders(build_orders_filter(periodo, limit=limit))
    raw_orders = payload.get("orders") if isinstance(payload, dict) else None
    if not isinstance(raw_orders, list):
        raise MalformedResponse("Resposta do gateway de pedidos sem o campo 'orders'", fonte=Fonte.SHOPIFY.value)

    orders = [order_from_payload(o) for o in raw_orders if isinstance(o, dict)]
    dentro = orders_between(orders, periodo.start, periodo.end)
    if len(dentro) != len(orders):
        logger.info("Descartados %d pedidos fora da janela %s", len(orders) - len(dentro), periodo.label)
    return dentro


def _as_utc(dt: datetime) -> datetime:
    """Instante sem fuso é tratado como UTC (mesma regra de parse_iso)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def aggregate(
    start: Union[Periodo, datetime],
    end: Optional[datetime] = None,
    cost_tables: Optional[CostTables] = None,
    gateway: Optional[OrdersGateway] = None,
    *,
    limit: int = SHOPIFY_ORDERS_LIMIT,
) -> MetricsSummary:
    """
    Resumo de métricas de pedidos para [start, end].

    Aceita um Periodo já resolvido ou o par de instantes. Falha do gateway
    (ou resposta sem 'orders') propaga a exceção: não há resumo parcial.
    """
    if gateway is None:
        raise ValueError("gateway de pedidos é obrigatório")
    if isinstance(start, Periodo):
        periodo = start
    else:
        if end is None:
            raise ValueError("end é obrigatório quando start é datetime")
        periodo = Periodo(label="custom", start=_as_utc(start), end=_as_utc(end), tz_name=APP_TIMEZONE)

    orders = fetch_orders(gateway, periodo, limit=limit)
    return summarize(orders, cost_tables or CostTables())
