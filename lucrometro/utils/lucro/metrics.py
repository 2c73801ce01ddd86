from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from lucrometro.utils.appmax.metrics import AppmaxMetrics
from lucrometro.utils.vendas.shopify.aggregator import MetricsSummary

SHOPIFY_FEE_RATE = 0.01  # 1% do faturamento pago (exibição)

@dataclass(frozen=True)
class LucroResumo:
    net_profit: float = 0.0
    ad_spend: float = 0.0
    roas: float = 0.0
    receita_nao_paga: float = 0.0
    shopify_fee: float = 0.0
    cogs_usd: float = 0.0
    shipping_usd: float = 0.0
    cambio: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

def converter_gasto_ads(spend: float, currency: str, cambio: float) -> float:
    """Leva o gasto de anúncios para BRL antes de somar com o resto."""
    spend = float(spend or 0.0)
    if (currency or "BRL").upper() == "USD":
        return spend * cambio
    return spend

def _div(a: float, b: float) -> float:
    return a / b if b else 0.0

def compor_lucro(
    summary: Optional[MetricsSummary],
    appmax: AppmaxMetrics,
    ad_spend: float,
    cambio: float,
) -> LucroResumo:
    """
    Lucro líquido = Appmax - COGS - anúncios - frete - taxa fixa - impostos.
    Todos os valores já em BRL (ad_spend convertido antes).
    """
    s = summary or MetricsSummary()
    net = (
        appmax.receita_liquida
        - s.cogs
        - ad_spend
        - s.shipping_cost
        - s.taxes.fixed_tax
        - s.taxes.order_value_tax
    )
    return LucroResumo(
        net_profit=net,
        ad_spend=ad_spend,
        roas=_div(s.paid_revenue, ad_spend),
        receita_nao_paga=s.unpaid_revenue,
        shopify_fee=s.paid_revenue * SHOPIFY_FEE_RATE,
        cogs_usd=_div(s.cogs, cambio),
        shipping_usd=_div(s.shipping_cost, cambio),
        cambio=cambio,
    )
