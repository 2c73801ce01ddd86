from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .config import FIXED_PER_ORDER_DEFAULT, TAX_RATE_DEFAULT


def _num(x, default: float = 0.0) -> float:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return default
    return v if v == v else default


def _frozen_costs(raw: Optional[Mapping[Any, Any]]) -> Mapping[str, float]:
    out: Dict[str, float] = {}
    for k, v in (raw or {}).items():
        key = str(k).strip()
        if key:
            out[key] = max(_num(v), 0.0)
    return MappingProxyType(out)


@dataclass(frozen=True)
class CostTables:
    """
    Snapshot imutável das tabelas de custo usadas numa agregação.
      - product_costs: product_id -> custo unitário (R$)
      - shipping_costs: chave do frete ('free-shipping'...) -> custo por envio
      - tax_rate: % sobre o valor do pedido (impostos + IOF)
      - fixed_per_order: taxa fixa por pedido pago (PRC)
    """
    product_costs: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    shipping_costs: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    tax_rate: float = TAX_RATE_DEFAULT
    fixed_per_order: float = FIXED_PER_ORDER_DEFAULT

    def __post_init__(self) -> None:
        object.__setattr__(self, "product_costs", _frozen_costs(self.product_costs))
        object.__setattr__(self, "shipping_costs", _frozen_costs(self.shipping_costs))
        object.__setattr__(self, "tax_rate", max(_num(self.tax_rate, TAX_RATE_DEFAULT), 0.0))
        object.__setattr__(self, "fixed_per_order", max(_num(self.fixed_per_order, FIXED_PER_ORDER_DEFAULT), 0.0))

    def product_cost(self, product_id: Optional[str]) -> float:
        if product_id is None:
            return 0.0
        return self.product_costs.get(str(product_id), 0.0)

    def shipping_cost(self, key: Optional[str]) -> float:
        if key is None:
            return 0.0
        return self.shipping_costs.get(key, 0.0)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CostTables":
        data = data or {}
        return cls(
            product_costs=data.get("product_costs") or {},
            shipping_costs=data.get("shipping_costs") or {},
            tax_rate=data.get("tax_rate", TAX_RATE_DEFAULT),
            fixed_per_order=data.get("fixed_per_order", FIXED_PER_ORDER_DEFAULT),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_costs": dict(self.product_costs),
            "shipping_costs": dict(self.shipping_costs),
            "tax_rate": self.tax_rate,
            "fixed_per_order": self.fixed_per_order,
        }
