# lucrometro/utils/painel/service.py
from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Protocol

from lucrometro.config.paths import ADS_CURRENCY, APP_TIMEZONE
from lucrometro.utils.appmax.metrics import AppmaxMetrics, appmax_metrics
from lucrometro.utils.core.filtros import Periodo, resolve_timeframe
from lucrometro.utils.custos.schema import CostTables
from lucrometro.utils.custos.service import carregar_custos
from lucrometro.utils.facebook.client import AdsMetrics
from lucrometro.utils.lucro.metrics import LucroResumo, compor_lucro, converter_gasto_ads
from lucrometro.utils.vendas.shopify.aggregator import MetricsSummary
from lucrometro.utils.vendas.shopify.service import OrdersGateway, aggregate

__all__ = ["PainelSnapshot", "GeracaoTracker", "atualizar_painel"]

logger = logging.getLogger(__name__)


class AdsSource(Protocol):
    def get_spend_metrics(self, start_date: str, end_date: str) -> AdsMetrics:
        ...


class RateSource(Protocol):
    def get_rate(self) -> float:
        ...


@dataclass(frozen=True)
class PainelSnapshot:
    periodo: Periodo
    shopify: MetricsSummary
    appmax: AppmaxMetrics
    ads: AdsMetrics
    cambio: float
    lucro: LucroResumo
    custos: CostTables
    geracao: int = 0

    def to_dict(self) -> Dict[str, Any]:
        start, end = self.periodo.as_query_bounds()
        return {
            "periodo": {
                "label": self.periodo.label,
                "from": start,
                "to": end,
                "timezone": self.periodo.tz_name,
                "fallback": self.periodo.fallback,
            },
            "shopify": self.shopify.to_dict(),
            "appmax": self.appmax.to_dict(),
            "ads": self.ads.to_dict(),
            "cambio": self.cambio,
            "lucro": self.lucro.to_dict(),
            "custos": {"tax_rate": self.custos.tax_rate, "fixed_per_order": self.custos.fixed_per_order},
            "geracao": self.geracao,
        }


class GeracaoTracker:
    """
    Token de geração monotônico. Quem dispara um refresh guarda o token;
    ao receber o resultado, descarta se já existe geração mais nova.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._atual = 0
        self._lock = threading.Lock()

    def nova_geracao(self) -> int:
        with self._lock:
            self._atual = next(self._counter)
            return self._atual

    @property
    def atual(self) -> int:
        return self._atual

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._atual


def atualizar_painel(
    timeframe: str,
    *,
    shopify: OrdersGateway,
    ads: AdsSource,
    cambio: RateSource,
    custos: Optional[CostTables] = None,
    now: Optional[datetime] = None,
    geracao: int = 0,
    ads_currency: str = ADS_CURRENCY,
    tz_name: str = APP_TIMEZONE,
) -> PainelSnapshot:
    """
    Um ciclo de refresh do painel: resolve o período, busca em paralelo
    pedidos/anúncios/câmbio e compõe Appmax + lucro. Se qualquer fonte
    falhar, a exceção dela propaga e nada é devolvido.
    """
    periodo = resolve_timeframe(timeframe, now=now, tz_name=tz_name)
    tables = custos if custos is not None else carregar_custos()
    start_date, end_date = periodo.as_dates()

    with ThreadPoolExecutor(max_workers=3) as pool:
        f_shopify = pool.submit(aggregate, periodo, None, tables, shopify)
        f_ads = pool.submit(ads.get_spend_metrics, start_date, end_date)
        f_cambio = pool.submit(cambio.get_rate)
        summary = f_shopify.result()
        ads_metrics = f_ads.result()
        rate = f_cambio.result()

    appmax = appmax_metrics(summary)
    gasto = converter_gasto_ads(ads_metrics.spend, ads_currency, rate)
    lucro = compor_lucro(summary, appmax, gasto, rate)
    logger.info(
        "Painel %s: pedidos=%d pagos=%d lucro=%.2f",
        periodo.label, summary.order_count, summary.paid_order_count, lucro.net_profit,
    )
    return PainelSnapshot(
        periodo=periodo,
        shopify=summary,
        appmax=appmax,
        ads=ads_metrics,
        cambio=rate,
        lucro=lucro,
        custos=tables,
        geracao=geracao,
    )
