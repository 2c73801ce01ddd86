from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

import requests

from lucrometro.config.paths import (
    FB_ACCESS_TOKEN,
    FB_AD_ACCOUNT_ID,
    FB_API_BASE,
    Fonte,
    HTTP_RETRIES,
)
from lucrometro.utils.core.http import get_json

logger = logging.getLogger(__name__)

_FONTE = Fonte.FACEBOOK.value
TOKEN_EXPIRED_CODE = 190
DEFAULT_TIMEOUT = 60


@dataclass(frozen=True)
class AdsMetrics:
    spend: float = 0.0
    impressions: int = 0
    clicks: int = 0
    configurado: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _num(x) -> float:
    try:
        return float(x)
    except (TypeError, ValueError):
        return 0.0


def _int(x) -> int:
    try:
        return int(float(x))
    except (TypeError, ValueError):
        return 0


def _is_token_error(r: requests.Response) -> bool:
    """Graph API devolve 400 com error.code=190 para token expirado."""
    if r.status_code != 400:
        return False
    try:
        body = r.json()
    except ValueError:
        return False
    err = body.get("error") if isinstance(body, dict) else None
    return isinstance(err, dict) and err.get("code") == TOKEN_EXPIRED_CODE


class FacebookAdsClient:
    """Insights de gasto da conta de anúncios (nível conta) para um período."""

    def __init__(
        self,
        ad_account_id: str,
        access_token: str,
        *,
        api_base: str = FB_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = HTTP_RETRIES,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.ad_account_id = (ad_account_id or "").strip()
        self.access_token = (access_token or "").strip()
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self.http = session or requests.Session()
        self._sleep = sleep

    @classmethod
    def from_env(cls, **kwargs: Any) -> "FacebookAdsClient":
        return cls(FB_AD_ACCOUNT_ID, FB_ACCESS_TOKEN, **kwargs)

    @property
    def configurado(self) -> bool:
        return bool(self.ad_account_id and self.access_token)

    def get_spend_metrics(self, start_date: str, end_date: str) -> AdsMetrics:
        """
        Gasto/impressões/cliques em [start_date, end_date] (YYYY-MM-DD).
        Token inválido => InvalidCredential (sem retry). Sem credenciais => zeros.
        """
        if not self.configurado:
            logger.warning("Meta Ads sem credenciais (FB_AD_ACCOUNT_ID/FB_ACCESS_TOKEN); gasto = 0")
            return AdsMetrics(configurado=False)

        url = f"{self.api_base}/act_{self.ad_account_id}/insights"
        params = {
            "access_token": self.access_token,
            "level": "account",
            "fields": "spend,impressions,clicks",
            "time_range": json.dumps({"since": start_date, "until": end_date}),
            "limit": 1000,
        }
        data = get_json(
            self.http,
            url,
            params=params,
            timeout=self.timeout,
            retries=self.retries,
            fonte=_FONTE,
            sleep=self._sleep,
            is_auth_error=_is_token_error,
        )
        rows = data.get("data") if isinstance(data, dict) else None
        if not rows or not isinstance(rows, list):
            return AdsMetrics()
        row = rows[0] if isinstance(rows[0], dict) else {}
        return AdsMetrics(
            spend=_num(row.get("spend")),
            impressions=_int(row.get("impressions")),
            clicks=_int(row.get("clicks")),
        )
