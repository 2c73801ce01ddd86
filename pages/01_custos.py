# pages/01_custos.py
from __future__ import annotations
import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]  # <repo>/
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lucrometro.dashboard.custos.compositor import tabela_custos_frete, tabela_custos_produtos
from lucrometro.utils.custos.config import get_custos_path
from lucrometro.utils.core.errors import PainelError
from lucrometro.utils.custos.service import carregar_custos
from lucrometro.utils.shopify.client import ShopifyClient

st.set_page_config(page_title="Lucrômetro — Custos", page_icon="💸", layout="wide")

st.title("💸 Tabelas de custo")
path = get_custos_path()
st.caption(f"Fonte: {path}. Para alterar: python -m scripts.custos.importar_custos --arquivo custos.json")

try:
    tables = carregar_custos()
except ValueError as e:
    st.error(f"Tabela de custos inválida: {e}")
    st.stop()

@st.cache_data(ttl=600, show_spinner="Buscando catálogo da loja...")
def _catalogo() -> list:
    return ShopifyClient.from_env().get_products()["products"]

try:
    produtos = _catalogo()
except (PainelError, ValueError) as e:
    st.warning(f"Catálogo da loja indisponível; exibindo só os custos cadastrados. ({e})")
    produtos = []

c1, c2 = st.columns(2)
c1.metric("Impostos + IOF", f"{tables.tax_rate:.2f}%")
c2.metric("Taxa fixa por pedido (PRC)", f"R$ {tables.fixed_per_order:.2f}")

tab_prod, tab_frete = st.tabs(["Produtos", "Frete"])
with tab_prod:
    df = tabela_custos_produtos(tables, produtos)
    if df.empty:
        st.info("Nenhum produto no catálogo nem custo cadastrado (CMV = 0).")
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)
with tab_frete:
    st.dataframe(tabela_custos_frete(tables), use_container_width=True, hide_index=True)
