# lucrometro/dashboard/painel/compositor.py
from __future__ import annotations
from typing import Any, Dict, List

import pandas as pd

from lucrometro.utils.painel.service import PainelSnapshot

_RESUMO_COLS = ["grupo", "metrica", "valor"]

def brl(v: float) -> str:
    """Formata em reais no padrão brasileiro (R$ 1.234,56)."""
    s = f"{float(v or 0.0):,.2f}"
    return "R$ " + s.replace(",", "X").replace(".", ",").replace("X", ".")

def usd(v: float) -> str:
    return f"US$ {float(v or 0.0):,.2f}"

def cards_faturamento(snap: PainelSnapshot) -> List[Dict[str, Any]]:
    s = snap.shopify
    return [
        {"label": "Faturamento total", "valor": brl(s.total_revenue), "ajuda": f"{s.order_count} pedidos"},
        {"label": "Faturamento pago", "valor": brl(s.paid_revenue), "ajuda": f"{s.paid_order_count} pagos"},
        {"label": "Não pago", "valor": brl(snap.lucro.receita_nao_paga), "ajuda": None},
        {"label": "Ticket médio", "valor": brl(s.aov), "ajuda": None},
        {"label": "Appmax (líquido)", "valor": brl(snap.appmax.receita_liquida),
         "ajuda": f"taxas {brl(snap.appmax.transaction_fees)}"},
        {"label": "Lucro líquido", "valor": brl(snap.lucro.net_profit), "ajuda": f"ROAS {snap.lucro.roas:.2f}"},
    ]

def cards_custos(snap: PainelSnapshot) -> List[Dict[str, Any]]:
    s = snap.shopify
    l = snap.lucro
    return [
        {"label": "CMV (produtos)", "valor": brl(s.cogs), "ajuda": usd(l.cogs_usd)},
        {"label": "Frete", "valor": brl(s.shipping_cost), "ajuda": usd(l.shipping_usd)},
        {"label": "Impostos", "valor": brl(s.taxes.order_value_tax), "ajuda": f"{snap.custos.tax_rate:.2f}%"},
        {"label": "Taxa fixa (PRC)", "valor": brl(s.taxes.fixed_tax), "ajuda": None},
        {"label": "Anúncios", "valor": brl(l.ad_spend),
         "ajuda": None if snap.ads.configurado else "Meta Ads não configurado"},
        {"label": "Taxa Shopify", "valor": brl(l.shopify_fee), "ajuda": "1% do pago"},
    ]

def tabela_resumo(snap: PainelSnapshot) -> pd.DataFrame:
    s = snap.shopify
    rows = [
        ("Shopify", "faturamento_total", s.total_revenue),
        ("Shopify", "faturamento_pago", s.paid_revenue),
        ("Shopify", "pedidos", s.order_count),
        ("Shopify", "pedidos_pagos", s.paid_order_count),
        ("Shopify", "ticket_medio", s.aov),
        ("Pagamentos", "pix", s.payment_methods.pix),
        ("Pagamentos", "cartao", s.payment_methods.credit_card),
        ("Appmax", "taxas", snap.appmax.transaction_fees),
        ("Appmax", "receita_liquida", snap.appmax.receita_liquida),
        ("Custos", "cmv", s.cogs),
        ("Custos", "frete", s.shipping_cost),
        ("Custos", "impostos", s.taxes.order_value_tax),
        ("Custos", "taxa_fixa", s.taxes.fixed_tax),
        ("Custos", "anuncios", snap.lucro.ad_spend),
        ("Resultado", "lucro_liquido", snap.lucro.net_profit),
        ("Resultado", "roas", snap.lucro.roas),
        ("Resultado", "cambio_usd_brl", snap.cambio),
    ]
    df = pd.DataFrame(rows, columns=_RESUMO_COLS)
    df["valor"] = pd.to_numeric(df["valor"], errors="coerce").fillna(0.0).astype(float)
    return df
