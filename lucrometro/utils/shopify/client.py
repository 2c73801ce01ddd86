from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from lucrometro.config.paths import (
    Fonte,
    HTTP_RETRIES,
    HTTP_TIMEOUT_SEC,
    SHOPIFY_ACCESS_TOKEN,
    SHOPIFY_API_VERSION,
    SHOPIFY_ORDERS_LIMIT,
    SHOPIFY_ORDERS_MAX_PAGES,
    SHOPIFY_STORE_URL,
    SHOPIFY_WORKER_URL,
)
from lucrometro.utils.core.errors import PainelError, MalformedResponse
from lucrometro.utils.core.http import get_json

logger = logging.getLogger(__name__)

_FONTE = Fonte.SHOPIFY.value


class ShopifyClient:
    """
    Cliente da loja Shopify em dois modos:
      - worker: `base_url` é o proxy de borda que anexa a credencial
        (rotas /orders, /products, /shop);
      - admin: `access_token` informado, fala direto com
        https://<loja>/admin/api/<versão>/*.json usando X-Shopify-Access-Token.

    Paginação por since_id em get_orders(): continua enquanto a página vier
    cheia e `max_pages` permitir. Se a última página permitida vier cheia,
    registra aviso de possível truncamento.
    """

    def __init__(
        self,
        base_url: str,
        *,
        access_token: Optional[str] = None,
        api_version: str = SHOPIFY_API_VERSION,
        timeout: float = HTTP_TIMEOUT_SEC,
        retries: int = HTTP_RETRIES,
        max_pages: int = SHOPIFY_ORDERS_MAX_PAGES,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not base_url:
            raise ValueError("base_url da Shopify não configurada (SHOPIFY_WORKER_URL ou SHOPIFY_STORE_URL)")
        base = base_url.rstrip("/")
        if not base.startswith("http"):
            base = f"https://{base}"
        self.base_url = base
        self.access_token = access_token or None
        self.api_version = api_version
        self.timeout = timeout
        self.retries = retries
        self.max_pages = max(1, int(max_pages))
        self.http = session or requests.Session()
        self._sleep = sleep

    # ---------- factories ----------

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ShopifyClient":
        """Prefere o worker; sem worker, usa a Admin API com token."""
        if SHOPIFY_WORKER_URL:
            return cls(SHOPIFY_WORKER_URL, **kwargs)
        return cls(SHOPIFY_STORE_URL, access_token=SHOPIFY_ACCESS_TOKEN, **kwargs)

    # ---------- low-level helpers ----------

    @property
    def is_admin(self) -> bool:
        return self.access_token is not None

    def _url(self, recurso: str) -> str:
        if self.is_admin:
            return f"{self.base_url}/admin/api/{self.api_version}/{recurso}.json"
        return f"{self.base_url}/{recurso}"

    def _headers(self) -> Dict[str, str]:
        h = {"Accept": "application/json"}
        if self.access_token:
            h["X-Shopify-Access-Token"] = self.access_token
        return h

    def _get(self, recurso: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return get_json(
            self.http,
            self._url(recurso),
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
            retries=self.retries,
            fonte=_FONTE,
            sleep=self._sleep,
        )

    # ---------- Endpoints ----------

    def get_orders(self, filters: Dict[str, Any]) -> Dict[str, Any]:
        """
        Busca pedidos com os filtros da Admin API (created_at_min/max, status,
        limit, fields). Retorna {"orders": [...]} com todas as páginas lidas.
        """
        params = dict(filters or {})
        limit = int(params.get("limit") or SHOPIFY_ORDERS_LIMIT)
        params["limit"] = limit
        # since_id=0 põe a Admin API em ordem crescente de id (sem ele vem do mais novo)
        params.setdefault("since_id", 0)

        all_orders: List[Dict[str, Any]] = []
        page = 0
        while True:
            data = self._get("orders", params)
            orders = data.get("orders") if isinstance(data, dict) else None
            if not isinstance(orders, list):
                raise MalformedResponse("Resposta da Shopify sem o campo 'orders'", fonte=_FONTE)
            all_orders.extend(orders)
            page += 1

            if len(orders) < limit:
                break
            if page >= self.max_pages:
                logger.warning(
                    "Pedidos possivelmente truncados: %d páginas de %d atingidas (total lido=%d). "
                    "Aumente SHOPIFY_ORDERS_MAX_PAGES.",
                    page, limit, len(all_orders),
                )
                break
            ids = [int(o["id"]) for o in orders if isinstance(o, dict) and str(o.get("id", "")).isdigit()]
            if not ids:
                break
            params["since_id"] = max(ids)

        return {"orders": all_orders}

    def get_products(self, limit: int = 250) -> Dict[str, Any]:
        data = self._get("products", {"limit": limit})
        if not isinstance(data, dict) or not isinstance(data.get("products"), list):
            raise MalformedResponse("Resposta da Shopify sem o campo 'products'", fonte=_FONTE)
        return data

    def get_shop(self) -> Dict[str, Any]:
        data = self._get("shop")
        if not isinstance(data, dict) or not isinstance(data.get("shop"), dict):
            raise MalformedResponse("Resposta da Shopify sem o campo 'shop'", fonte=_FONTE)
        return data

    def test_connection(self) -> Dict[str, Any]:
        """Diagnóstico: nunca levanta; devolve is_connected + shop ou erro."""
        try:
            data = self.get_shop()
        except PainelError as e:
            return {"is_connected": False, "error": e.message, "tipo": type(e).__name__}
        return {"is_connected": True, "shop": data["shop"]}


def fetch_shipping_rates() -> List[Dict[str, Any]]:
    """Métodos de frete cadastrados na loja (chaves usadas na tabela de custos)."""
    return [
        {
            "id": "free-shipping",
            "name": "FRETE GRÁTIS",
            "description": "De 7 a 14 dias",
            "price": 0.0,
            "processing_time": "7-14 dias",
        },
        {
            "id": "premium-shipping",
            "name": "FRETE PREMIUM",
            "description": "De 7 a 14 dias | Segurança Premium no seu Pedido",
            "price": 29.0,
            "processing_time": "7-14 dias",
        },
    ]
