# pages/00_painel.py
from __future__ import annotations
import sys
from datetime import date, timedelta
from pathlib import Path

import pandas as pd
import streamlit as st

# Ajuste de sys.path para rodar a partir da raiz do projeto
ROOT = Path(__file__).resolve().parents[1]  # <repo>/
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lucrometro.dashboard.painel.compositor import cards_custos, cards_faturamento, tabela_resumo
from lucrometro.services.painel_service import GeracaoTracker, atualizar_painel
from lucrometro.utils.cambio.client import ExchangeRateClient
from lucrometro.utils.core.errors import InvalidCredential, PainelError
from lucrometro.utils.core.filtros import PRESETS_EXIBICAO, format_range
from lucrometro.utils.facebook.client import FacebookAdsClient
from lucrometro.utils.shopify.client import ShopifyClient

st.set_page_config(page_title="Lucrômetro — Painel", page_icon="📈", layout="wide")

st.title("📈 Painel de lucro")
st.caption("Shopify + Appmax + Meta Ads. Valores em BRL; câmbio USD→BRL com cache de 1h.")

CUSTOM = "Personalizado"

# ================ Colaboradores (uma instância por sessão) ================
@st.cache_resource
def _cambio() -> ExchangeRateClient:
    return ExchangeRateClient()

def _tracker() -> GeracaoTracker:
    if "geracao" not in st.session_state:
        st.session_state["geracao"] = GeracaoTracker()
    return st.session_state["geracao"]

# ================ Seletor de período ================
col_sel, col_range, col_btn = st.columns([2, 3, 1])
with col_sel:
    escolha = st.selectbox("Período", list(PRESETS_EXIBICAO) + [CUSTOM], index=0)
timeframe = escolha
with col_range:
    if escolha == CUSTOM:
        hoje = date.today()
        sel = st.date_input("Intervalo", value=(hoje - timedelta(days=6), hoje), format="DD/MM/YYYY")
        # durante a seleção o widget devolve só a data inicial
        ini, fim = (sel[0], sel[-1]) if isinstance(sel, (list, tuple)) and sel else (sel, sel)
        timeframe = format_range(ini, fim)
        st.caption(timeframe)
with col_btn:
    st.write("")
    atualizar = st.button("🔁 Atualizar", use_container_width=True, type="primary")

def _refresh(tf: str) -> None:
    tracker = _tracker()
    token = tracker.nova_geracao()
    try:
        shopify = ShopifyClient.from_env()
        snap = atualizar_painel(
            tf,
            shopify=shopify,
            ads=FacebookAdsClient.from_env(),
            cambio=_cambio(),
            geracao=token,
        )
    except InvalidCredential as e:
        st.session_state["painel_erro"] = ("credencial", e)
        return
    except (PainelError, ValueError) as e:
        st.session_state["painel_erro"] = ("falha", e)
        return
    # resultado de geração antiga é descartado
    if tracker.is_current(token):
        st.session_state["painel"] = snap
        st.session_state.pop("painel_erro", None)

if atualizar or st.session_state.get("painel_tf") != timeframe:
    st.session_state["painel_tf"] = timeframe
    with st.spinner("Buscando pedidos, anúncios e câmbio..."):
        _refresh(timeframe)

# ================ Erros ================
erro = st.session_state.get("painel_erro")
if erro:
    tipo, exc = erro
    fonte = getattr(exc, "fonte", None) or "?"
    if tipo == "credencial":
        st.error(f"🔑 Credencial inválida ou expirada ({fonte}). Atualize o token no .env e tente de novo.")
    else:
        st.error(f"❌ Falha ao atualizar o painel ({fonte}): {exc}")

snap = st.session_state.get("painel")
if snap is None:
    st.info("Nenhum dado carregado ainda.")
    st.stop()

if snap.periodo.fallback:
    st.warning(f"Período {snap.periodo.label!r} inválido; exibindo o ano corrente.")
ini_s, fim_s = snap.periodo.as_dates()
st.caption(f"Janela: {ini_s} → {fim_s} ({snap.periodo.tz_name})")

# ================ Cards ================
def _render_cards(cards) -> None:
    cols = st.columns(3)
    for i, c in enumerate(cards):
        with cols[i % 3]:
            st.metric(c["label"], c["valor"], help=c.get("ajuda"))

st.subheader("Faturamento")
_render_cards(cards_faturamento(snap))
st.subheader("Custos")
_render_cards(cards_custos(snap))

st.divider()
df: pd.DataFrame = tabela_resumo(snap)
st.dataframe(df, use_container_width=True, hide_index=True)
st.download_button(
    "⬇️ Baixar CSV",
    data=df.to_csv(index=False).encode("utf-8"),
    file_name="painel_resumo.csv",
    mime="text/csv",
    use_container_width=True,
)
