# lucrometro/dashboard/custos/compositor.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

import pandas as pd

from lucrometro.utils.custos.schema import CostTables
from lucrometro.utils.custos.service import carregar_custos
from lucrometro.utils.shopify.client import fetch_shipping_rates

def _tables(tables: Optional[CostTables]) -> CostTables:
    return tables if tables is not None else carregar_custos()

_PRODUTOS_COLS = ["product_id", "titulo", "custo_unitario"]

def tabela_custos_produtos(
    tables: Optional[CostTables] = None,
    produtos: Optional[List[Dict[str, Any]]] = None,
) -> pd.DataFrame:
    """
    Catálogo da loja (`produtos` de ShopifyClient.get_products) + custo cadastrado.
    Produto sem custo aparece com 0; custo sem produto no catálogo fica sem título.
    """
    t = _tables(tables)
    rows: List[Dict[str, Any]] = []
    vistos = set()
    for p in produtos or []:
        if not isinstance(p, dict) or p.get("id") is None:
            continue
        pid = str(p["id"])
        vistos.add(pid)
        rows.append({"product_id": pid, "titulo": p.get("title"), "custo_unitario": t.product_cost(pid)})
    for pid, v in t.product_costs.items():
        if pid not in vistos:
            rows.append({"product_id": pid, "titulo": None, "custo_unitario": v})

    df = pd.DataFrame(rows, columns=_PRODUTOS_COLS)
    if not df.empty:
        df = df.sort_values("product_id", kind="mergesort").reset_index(drop=True)
    return df

def tabela_custos_frete(tables: Optional[CostTables] = None) -> pd.DataFrame:
    """Métodos de frete da loja + custo cadastrado (0 quando ausente)."""
    t = _tables(tables)
    rows = []
    vistos = set()
    for rate in fetch_shipping_rates():
        key = rate["id"]
        vistos.add(key)
        rows.append({"metodo": key, "nome": rate["name"], "preco_cliente": rate["price"],
                     "custo": t.shipping_cost(key)})
    # chaves extras cadastradas na tabela
    for key, v in sorted(t.shipping_costs.items()):
        if key not in vistos:
            rows.append({"metodo": key, "nome": None, "preco_cliente": None, "custo": v})
    return pd.DataFrame(rows, columns=["metodo", "nome", "preco_cliente", "custo"])
