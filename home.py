# home.py
import streamlit as st

st.set_page_config(page_title="Lucrômetro — Home", layout="wide")

st.title("Lucrômetro — Home")
st.caption("Painel de lucratividade da loja. Use a barra lateral para navegar.")

st.markdown("""
### O que você encontra aqui
- **📈 Painel (00):** faturamento, taxas Appmax, custos, anúncios e lucro líquido por período.
- **💸 Custos (01):** tabelas de custo por produto, frete, imposto e taxa fixa.
""")

st.divider()
cols = st.columns(2)
with cols[0]:
    st.page_link("pages/00_painel.py", label="📈 Ir para o Painel", icon="↗")
with cols[1]:
    st.page_link("pages/01_custos.py", label="💸 Ir para Custos", icon="↗")

with st.sidebar:
    st.header("Navegação")
    st.page_link("home.py", label="🏠 Início")
    st.page_link("pages/00_painel.py", label="📈 Painel")
    st.page_link("pages/01_custos.py", label="💸 Custos")

st.info(
    "Credenciais e URLs vêm do .env (SHOPIFY_WORKER_URL ou SHOPIFY_STORE_URL/SHOPIFY_ACCESS_TOKEN, "
    "FB_AD_ACCOUNT_ID/FB_ACCESS_TOKEN)."
)
