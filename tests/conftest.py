from __future__ import annotations

import os
import tempfile
from datetime import datetime
from typing import Any, Dict, List, Optional

# isola BASE_PATH antes de importar lucrometro.config.paths
os.environ["BASE_PATH"] = tempfile.mkdtemp(prefix="lucrometro_test_")
for _k in ("SHOPIFY_WORKER_URL", "SHOPIFY_STORE_URL", "SHOPIFY_ACCESS_TOKEN",
           "FB_AD_ACCOUNT_ID", "FB_ACCESS_TOKEN", "CUSTOS_YAML"):
    os.environ[_k] = ""

import pytest
import requests
from zoneinfo import ZoneInfo

SP = ZoneInfo("America/Sao_Paulo")


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None,
                 url: str = "http://fake"):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))
        self.url = url

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        if self._payload is None:
            raise ValueError("sem JSON")
        return self._payload


class FakeSession:
    """Devolve respostas (ou levanta exceções) na ordem; registra cada GET."""

    def __init__(self, *steps: Any) -> None:
        self.steps: List[Any] = list(steps)
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {}),
                           "timeout": timeout})
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


class FakeGateway:
    def __init__(self, orders: Any = None, payload: Any = None, erro: Optional[Exception] = None) -> None:
        self.payload = payload if payload is not None else {"orders": list(orders or [])}
        self.erro = erro
        self.filters: List[Dict[str, Any]] = []

    def get_orders(self, filters: Dict[str, Any]) -> Dict[str, Any]:
        self.filters.append(filters)
        if self.erro is not None:
            raise self.erro
        return self.payload


@pytest.fixture()
def now_sp() -> datetime:
    return datetime(2024, 3, 15, 12, 0, tzinfo=SP)


@pytest.fixture()
def sleeps() -> List[float]:
    return []


@pytest.fixture()
def fake_sleep(sleeps):
    return sleeps.append


def order(id_: int, total: Any, status: str = "paid", *, gateway: str = "",
          created_at: str = "2024-03-15T10:00:00-03:00", cancelled_at: Optional[str] = None,
          closed_at: Optional[str] = None, line_items=None, shipping: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "id": id_,
        "total_price": total,
        "financial_status": status,
        "gateway": gateway,
        "created_at": created_at,
        "cancelled_at": cancelled_at,
        "closed_at": closed_at,
        "line_items": line_items or [],
        "shipping_lines": [{"title": t} for t in (shipping or [])],
    }


__all__ = ["FakeResponse", "FakeSession", "FakeGateway", "order", "SP", "requests"]
