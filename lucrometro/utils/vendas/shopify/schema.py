from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from lucrometro.utils.core.filtros import parse_iso

# Vocabulário conhecido de financial_status (valores novos são mantidos como vieram)
class FinancialStatus:
    PENDING = "pending"
    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    PARTIALLY_REFUNDED = "partially_refunded"
    REFUNDED = "refunded"
    VOIDED = "voided"

ORDER_FIELDS = (
    "id,total_price,financial_status,created_at,cancelled_at,closed_at,"
    "fulfillment_status,line_items,shipping_lines,gateway,payment_details"
)

def _num(x) -> float:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return 0.0
    return v if v == v else 0.0  # NaN -> 0

def _money(x) -> float:
    return max(_num(x), 0.0)

def _qty(x) -> int:
    try:
        return max(int(float(x)), 0)
    except (TypeError, ValueError, OverflowError):
        return 0

def _str_or_none(x) -> Optional[str]:
    if x is None:
        return None
    s = str(x).strip()
    return s or None

@dataclass(frozen=True)
class LineItem:
    product_id: Optional[str]
    quantity: int
    price: float

@dataclass(frozen=True)
class ShippingLine:
    title: str

@dataclass(frozen=True)
class Order:
    id: Optional[str]
    total_price: float
    financial_status: str
    created_at: Optional[datetime]
    cancelled_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    fulfillment_status: Optional[str] = None
    gateway: str = ""
    is_cancelled: bool = False
    is_closed: bool = False
    line_items: Tuple[LineItem, ...] = ()
    shipping_lines: Tuple[ShippingLine, ...] = ()

def line_item_from_payload(raw: Dict[str, Any]) -> LineItem:
    return LineItem(
        product_id=_str_or_none(raw.get("product_id")),
        quantity=_qty(raw.get("quantity")),
        price=_money(raw.get("price")),
    )

def order_from_payload(raw: Dict[str, Any]) -> Order:
    """
    Converte o JSON de um pedido em Order.
    Campos ausentes/ilegíveis viram 0/None: um pedido ruim não derruba o lote.
    """
    raw = raw or {}
    items = raw.get("line_items")
    lines = raw.get("shipping_lines")
    return Order(
        id=_str_or_none(raw.get("id")),
        total_price=_money(raw.get("total_price")),
        financial_status=str(raw.get("financial_status") or "").strip().lower(),
        created_at=parse_iso(raw.get("created_at")),
        cancelled_at=parse_iso(raw.get("cancelled_at")),
        closed_at=parse_iso(raw.get("closed_at")),
        fulfillment_status=_str_or_none(raw.get("fulfillment_status")),
        gateway=str(raw.get("gateway") or ""),
        is_cancelled=bool(raw.get("cancelled_at")),
        is_closed=bool(raw.get("closed_at")),
        line_items=tuple(line_item_from_payload(it) for it in items if isinstance(it, dict))
        if isinstance(items, list) else (),
        shipping_lines=tuple(ShippingLine(title=str(sl.get("title") or "")) for sl in lines if isinstance(sl, dict))
        if isinstance(lines, list) else (),
    )
