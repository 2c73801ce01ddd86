# lucrometro/utils/vendas/shopify/aggregator.py
from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List

from lucrometro.utils.custos.schema import CostTables
from .rules import PIX, is_paid_order, payment_method, shipping_method
from .schema import Order

__all__ = [
    "PaymentSplit", "TaxBreakdown", "MetricsSummary",
    "order_cogs", "order_shipping_cost", "order_taxes", "summarize",
]

@dataclass(frozen=True)
class PaymentSplit:
    pix: float = 0.0
    credit_card: float = 0.0

@dataclass(frozen=True)
class TaxBreakdown:
    order_value_tax: float = 0.0
    fixed_tax: float = 0.0

@dataclass(frozen=True)
class MetricsSummary:
    total_revenue: float = 0.0
    paid_revenue: float = 0.0
    order_count: int = 0
    paid_order_count: int = 0
    aov: float = 0.0
    cogs: float = 0.0
    shipping_cost: float = 0.0
    payment_methods: PaymentSplit = field(default_factory=PaymentSplit)
    taxes: TaxBreakdown = field(default_factory=TaxBreakdown)

    @property
    def unpaid_revenue(self) -> float:
        return self.total_revenue - self.paid_revenue

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

def order_cogs(order: Order, costs: CostTables) -> float:
    return sum(it.quantity * costs.product_cost(it.product_id) for it in order.line_items)

def order_shipping_cost(order: Order, costs: CostTables) -> float:
    return costs.shipping_cost(shipping_method(order))

def order_taxes(order: Order, costs: CostTables) -> TaxBreakdown:
    return TaxBreakdown(
        order_value_tax=order.total_price * costs.tax_rate / 100.0,
        fixed_tax=costs.fixed_per_order,
    )

def summarize(orders: Iterable[Order], costs: CostTables) -> MetricsSummary:
    """
    Reduz os pedidos (já filtrados pela janela) no resumo de métricas.
    Receita total conta todos; tudo o mais só pedidos pagos.
    """
    matched: List[Order] = list(orders)
    paid = [o for o in matched if is_paid_order(o)]

    total_revenue = sum(o.total_price for o in matched)
    paid_revenue = 0.0
    pix = 0.0
    credit_card = 0.0
    cogs = 0.0
    shipping = 0.0
    order_value_tax = 0.0
    fixed_tax = 0.0
    for o in paid:
        paid_revenue += o.total_price
        if payment_method(o) == PIX:
            pix += o.total_price
        else:
            credit_card += o.total_price
        cogs += order_cogs(o, costs)
        shipping += order_shipping_cost(o, costs)
        t = order_taxes(o, costs)
        order_value_tax += t.order_value_tax
        fixed_tax += t.fixed_tax

    paid_count = len(paid)
    return MetricsSummary(
        total_revenue=total_revenue,
        paid_revenue=paid_revenue,
        order_count=len(matched),
        paid_order_count=paid_count,
        aov=(paid_revenue / paid_count) if paid_count else 0.0,
        cogs=cogs,
        shipping_cost=shipping,
        payment_methods=PaymentSplit(pix=pix, credit_card=credit_card),
        taxes=TaxBreakdown(order_value_tax=order_value_tax, fixed_tax=fixed_tax),
    )
