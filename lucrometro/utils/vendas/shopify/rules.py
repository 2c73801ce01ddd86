from __future__ import annotations
from typing import Optional, Sequence, Tuple

from .schema import FinancialStatus, Order

PIX = "pix"
CREDIT_CARD = "credit_card"

FREE_SHIPPING = "free-shipping"
PREMIUM_SHIPPING = "premium-shipping"

_PAID_STATUSES = frozenset({FinancialStatus.PAID, FinancialStatus.PARTIALLY_PAID})
_CLOSED_OK_STATUSES = _PAID_STATUSES | {FinancialStatus.PARTIALLY_REFUNDED, FinancialStatus.REFUNDED}

# Regras ordenadas (bucket, substrings). Primeira que casar vence.
PAYMENT_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (PIX, ("pix",)),
)
PAYMENT_DEFAULT = CREDIT_CARD

SHIPPING_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (FREE_SHIPPING, ("grátis", "free")),
    (PREMIUM_SHIPPING, ("premium",)),
)


def _first_match(text: str, rules: Sequence[Tuple[str, Tuple[str, ...]]]) -> Optional[str]:
    t = (text or "").casefold()
    for bucket, needles in rules:
        if any(n.casefold() in t for n in needles):
            return bucket
    return None


def is_paid_order(order: Order) -> bool:
    """
    Pedido pago: não cancelado, status em {paid, partially_paid} e,
    se fechado, status em {paid, partially_paid, partially_refunded, refunded}.
    """
    if order.is_cancelled:
        return False
    if order.is_closed and order.financial_status not in _CLOSED_OK_STATUSES:
        return False
    return order.financial_status in _PAID_STATUSES


def payment_method(order: Order) -> str:
    """'pix' ou 'credit_card' pelo nome do gateway (sem terceiro bucket)."""
    return _first_match(order.gateway, PAYMENT_RULES) or PAYMENT_DEFAULT


def shipping_method(order: Order) -> Optional[str]:
    """Bucket de frete pelo título da primeira linha de envio; None se não classificado."""
    if not order.shipping_lines:
        return None
    return _first_match(order.shipping_lines[0].title, SHIPPING_RULES)
