from __future__ import annotations

import json
import threading

import pytest

from conftest import FakeGateway, order
from lucrometro.utils.core.errors import GatewayUnavailable, InvalidCredential
from lucrometro.utils.custos.schema import CostTables
from lucrometro.utils.facebook.client import AdsMetrics
from lucrometro.utils.painel.service import GeracaoTracker, atualizar_painel

COSTS = CostTables(product_costs={"10": 20.0}, shipping_costs={"free-shipping": 12.5}, tax_rate=10.0,
                   fixed_per_order=2.0)


class FakeAds:
    def __init__(self, spend: float = 30.0, erro=None) -> None:
        self.spend = spend
        self.erro = erro
        self.janelas = []

    def get_spend_metrics(self, start_date, end_date):
        self.janelas.append((start_date, end_date))
        if self.erro is not None:
            raise self.erro
        return AdsMetrics(spend=self.spend, impressions=100, clicks=5)


class FakeCambio:
    def __init__(self, rate: float = 5.0) -> None:
        self.rate = rate

    def get_rate(self) -> float:
        return self.rate


def _orders():
    return [
        order(1, 100, "paid", gateway="pix",
              line_items=[{"product_id": 10, "quantity": 2}], shipping=["FRETE GRÁTIS"]),
        order(2, 200, "pending"),
        order(3, 50, "paid", gateway="stripe", shipping=["Standard"]),
    ]


def test_refresh_composes_everything(now_sp):
    ads = FakeAds(30.0)
    snap = atualizar_painel("Today", shopify=FakeGateway(_orders()), ads=ads, cambio=FakeCambio(5.0),
                            custos=COSTS, now=now_sp, ads_currency="BRL", geracao=7)
    assert ads.janelas == [("2024-03-15", "2024-03-15")]
    assert snap.shopify.total_revenue == 350
    assert snap.appmax.receita_liquida == pytest.approx(146.02)
    assert snap.lucro.net_profit == pytest.approx(146.02 - 40 - 30 - 12.5 - 4 - 15)
    assert snap.lucro.roas == pytest.approx(5.0)
    assert snap.geracao == 7

    d = snap.to_dict()
    json.dumps(d)
    assert d["periodo"]["from"] == "2024-03-15T00:00:00-03:00"
    assert d["shopify"]["payment_methods"] == {"pix": 100.0, "credit_card": 50.0}


def test_usd_ad_spend_is_converted(now_sp):
    snap = atualizar_painel("Today", shopify=FakeGateway(_orders()), ads=FakeAds(10.0), cambio=FakeCambio(5.0),
                            custos=COSTS, now=now_sp, ads_currency="USD")
    assert snap.lucro.ad_spend == pytest.approx(50.0)
    assert snap.ads.spend == 10.0


@pytest.mark.parametrize(
    "shopify, ads, exc",
    [
        (FakeGateway(erro=GatewayUnavailable("off", fonte="shopify")), FakeAds(), GatewayUnavailable),
        (FakeGateway(_orders()), FakeAds(erro=InvalidCredential("expirado", fonte="facebook")), InvalidCredential),
    ],
)
def test_any_failure_fails_refresh(now_sp, shopify, ads, exc):
    with pytest.raises(exc):
        atualizar_painel("Today", shopify=shopify, ads=ads, cambio=FakeCambio(), custos=COSTS, now=now_sp)


def test_fallback_period_is_flagged(now_sp):
    snap = atualizar_painel("99/99/2024 - 01/01/2024", shopify=FakeGateway([]), ads=FakeAds(0.0),
                            cambio=FakeCambio(), custos=COSTS, now=now_sp)
    assert snap.periodo.fallback is True
    assert snap.periodo.as_dates() == ("2024-01-01", "2024-12-31")


def test_generation_tracker_discards_stale():
    t = GeracaoTracker()
    primeira = t.nova_geracao()
    segunda = t.nova_geracao()
    assert segunda > primeira
    assert not t.is_current(primeira)
    assert t.is_current(segunda)
    assert t.atual == segunda


def test_generation_tracker_threads():
    t = GeracaoTracker()
    tokens = []
    lock = threading.Lock()

    def worker():
        for _ in range(100):
            tok = t.nova_geracao()
            with lock:
                tokens.append(tok)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()
    assert sorted(tokens) == list(range(1, 401))
    assert t.is_current(400)
