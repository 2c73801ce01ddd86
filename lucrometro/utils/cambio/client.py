from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Tuple

import requests

from lucrometro.config.paths import (
    EXCHANGE_API_BASE,
    EXCHANGE_CACHE_TTL_SEC,
    EXCHANGE_FALLBACK_RATE,
    Fonte,
    HTTP_RETRIES,
    HTTP_TIMEOUT_SEC,
)
from lucrometro.utils.core.errors import MalformedResponse, PainelError
from lucrometro.utils.core.http import get_json

logger = logging.getLogger(__name__)


class ExchangeRateClient:
    """
    Cotação USD→BRL com cache em memória (TTL) e valor fixo de fallback.
    get_rate() nunca levanta.
    """

    def __init__(
        self,
        *,
        api_base: str = EXCHANGE_API_BASE,
        ttl_sec: float = EXCHANGE_CACHE_TTL_SEC,
        fallback: float = EXCHANGE_FALLBACK_RATE,
        timeout: float = HTTP_TIMEOUT_SEC,
        retries: int = HTTP_RETRIES,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self.ttl_sec = ttl_sec
        self.fallback = fallback
        self.timeout = timeout
        self.retries = retries
        self.http = session or requests.Session()
        self._clock = clock
        self._sleep = sleep
        self._cache: Optional[Tuple[float, float]] = None  # (rate, fetched_at)
        self._lock = threading.Lock()

    def _fetch(self) -> float:
        data = get_json(
            self.http,
            f"{self.api_base}/USD",
            timeout=self.timeout,
            retries=self.retries,
            fonte=Fonte.CAMBIO.value,
            sleep=self._sleep,
        )
        rates = data.get("rates") if isinstance(data, dict) else None
        rate = rates.get("BRL") if isinstance(rates, dict) else None
        try:
            rate = float(rate)
        except (TypeError, ValueError):
            rate = 0.0
        if rate <= 0:
            raise MalformedResponse("Resposta de câmbio sem rates.BRL válido", fonte=Fonte.CAMBIO.value)
        return rate

    def get_rate(self) -> float:
        with self._lock:
            now = self._clock()
            if self._cache and now - self._cache[1] < self.ttl_sec:
                return self._cache[0]
            try:
                rate = self._fetch()
            except PainelError as e:
                logger.warning("Falha ao buscar câmbio (%s); usando fallback %.2f", e, self.fallback)
                return self.fallback
            self._cache = (rate, now)
            return rate

    def reset_cache(self) -> None:
        with self._lock:
            self._cache = None
