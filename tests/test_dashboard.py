from __future__ import annotations

import pytest

from conftest import FakeGateway, order
from lucrometro.dashboard.custos.compositor import tabela_custos_frete, tabela_custos_produtos
from lucrometro.dashboard.painel.compositor import brl, cards_custos, cards_faturamento, tabela_resumo
from lucrometro.utils.custos.schema import CostTables
from lucrometro.utils.facebook.client import AdsMetrics
from lucrometro.utils.painel.service import atualizar_painel


class _Ads:
    def get_spend_metrics(self, start_date, end_date):
        return AdsMetrics(spend=30.0)


class _Cambio:
    def get_rate(self):
        return 5.0


@pytest.fixture()
def snap(now_sp):
    return atualizar_painel(
        "Today",
        shopify=FakeGateway([order(1, 100, "paid", gateway="pix"), order(2, 50, "pending")]),
        ads=_Ads(),
        cambio=_Cambio(),
        custos=CostTables(),
        now=now_sp,
        ads_currency="BRL",
    )


def test_brl_format():
    assert brl(1234.5) == "R$ 1.234,50"
    assert brl(None) == "R$ 0,00"


def test_cards(snap):
    fat = {c["label"]: c for c in cards_faturamento(snap)}
    assert fat["Faturamento total"]["valor"] == "R$ 150,00"
    assert fat["Faturamento pago"]["valor"] == "R$ 100,00"
    assert len(cards_custos(snap)) == 6


def test_tabela_resumo(snap):
    df = tabela_resumo(snap)
    assert list(df.columns) == ["grupo", "metrica", "valor"]
    linha = df.loc[df["metrica"] == "lucro_liquido", "valor"].iloc[0]
    assert linha == pytest.approx(snap.lucro.net_profit)
    assert df["valor"].dtype == float


def test_tabelas_custos():
    t = CostTables(product_costs={"b": 2, "a": 1}, shipping_costs={"free-shipping": 12.5, "sedex": 30})
    prod = tabela_custos_produtos(t)
    assert prod["product_id"].tolist() == ["a", "b"]
    frete = tabela_custos_frete(t)
    assert frete["metodo"].tolist() == ["free-shipping", "premium-shipping", "sedex"]
    assert frete["custo"].tolist() == [12.5, 0.0, 30.0]


def test_tabela_produtos_vazia():
    df = tabela_custos_produtos(CostTables())
    assert df.empty
    assert list(df.columns) == ["product_id", "titulo", "custo_unitario"]


def test_tabela_produtos_com_catalogo():
    t = CostTables(product_costs={"101": 12.0, "999": 3.0})
    catalogo = [{"id": 101, "title": "Camiseta"}, {"id": 102, "title": "Boné"}, {"title": "sem id"}]
    df = tabela_custos_produtos(t, catalogo)
    assert df["product_id"].tolist() == ["101", "102", "999"]
    assert df["titulo"].tolist() == ["Camiseta", "Boné", None]
    assert df["custo_unitario"].tolist() == [12.0, 0.0, 3.0]
