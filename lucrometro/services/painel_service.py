from lucrometro.utils.painel.service import (
    PainelSnapshot, GeracaoTracker, atualizar_painel,
)
from lucrometro.utils.vendas.shopify.service import aggregate, fetch_orders
from lucrometro.utils.custos.service import carregar_custos, salvar_custos

__all__ = [
    "PainelSnapshot", "GeracaoTracker", "atualizar_painel",
    "aggregate", "fetch_orders",
    "carregar_custos", "salvar_custos",
]
