from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Tuple

from lucrometro.utils.vendas.shopify.aggregator import MetricsSummary

# Tabela de taxas Appmax
PIX_FEE_RATE = 0.0099                          # 0.99%
CARD_FEE_RATES: Tuple[float, ...] = (0.0499, 0.0099)  # 4.99% + 0.99%

@dataclass(frozen=True)
class AppmaxMetrics:
    receita_liquida: float = 0.0
    order_count: int = 0
    transaction_fees: float = 0.0
    pix_fee: float = 0.0
    credit_card_fee: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

def taxa_pix(pix_revenue: float) -> float:
    return (pix_revenue or 0.0) * PIX_FEE_RATE

def taxa_cartao(credit_card_revenue: float) -> float:
    v = credit_card_revenue or 0.0
    return sum(v * r for r in CARD_FEE_RATES)

def calcular_taxas(pix_revenue: float, credit_card_revenue: float) -> float:
    return taxa_pix(pix_revenue) + taxa_cartao(credit_card_revenue)

def appmax_metrics(summary: Optional[MetricsSummary]) -> AppmaxMetrics:
    """Receita após taxas: (pix + cartão) - taxas. Sem resumo => tudo zero."""
    if summary is None:
        return AppmaxMetrics()
    pix = summary.payment_methods.pix
    card = summary.payment_methods.credit_card
    f_pix = taxa_pix(pix)
    f_card = taxa_cartao(card)
    fees = f_pix + f_card
    return AppmaxMetrics(
        receita_liquida=(pix + card) - fees,
        order_count=summary.paid_order_count,
        transaction_fees=fees,
        pix_fee=f_pix,
        credit_card_fee=f_card,
    )
