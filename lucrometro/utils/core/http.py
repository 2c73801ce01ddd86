from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from .errors import GatewayTimeout, GatewayUnavailable, InvalidCredential, MalformedResponse

logger = logging.getLogger(__name__)

RETRY_STATUSES = frozenset({408, 429, 500, 502, 503, 504})
BACKOFF_CAP_SEC = 5.0


def backoff_delay(tentativa: int, cap: float = BACKOFF_CAP_SEC) -> float:
    """1s, 2s, 4s... limitado a `cap`."""
    return min(1.0 * (2 ** tentativa), cap)


def _should_retry_status(status: int) -> bool:
    return status in RETRY_STATUSES or 500 <= status <= 599


def get_response(
    session: requests.Session,
    url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 10.0,
    retries: int = 3,
    fonte: Optional[str] = None,
    sleep: Callable[[float], None] = time.sleep,
    is_auth_error: Optional[Callable[[requests.Response], bool]] = None,
) -> requests.Response:
    """
    GET com retry/backoff exponencial em erros de rede, timeout e 408/429/5xx.
    401 vira InvalidCredential na hora (sem retry). Demais 4xx não são repetidos.
    Devolve a Response 2xx; qualquer outra coisa vira exceção da taxonomia.
    """
    tentativa = 0
    while True:
        try:
            r = session.get(url, params=params, headers=headers, timeout=timeout)
        except requests.Timeout as e:
            if tentativa < retries:
                sleep(backoff_delay(tentativa))
                tentativa += 1
                continue
            logger.error("GET %s timeout após %d tentativas", url, tentativa + 1)
            raise GatewayTimeout(f"Tempo esgotado ({timeout}s) em {url}", fonte=fonte) from e
        except requests.RequestException as e:
            if tentativa < retries:
                sleep(backoff_delay(tentativa))
                tentativa += 1
                continue
            logger.exception("GET %s exception: %s", url, e)
            raise GatewayUnavailable(f"Falha de rede em {url}: {e}", fonte=fonte) from e

        status = r.status_code
        if status == 401:
            logger.error("GET %s: credencial inválida (401)", url)
            raise InvalidCredential(f"Credencial inválida para {fonte or url}", fonte=fonte, status=401)
        if is_auth_error is not None and is_auth_error(r):
            logger.error("GET %s: token expirado ou inválido (status %s)", url, status)
            raise InvalidCredential(f"Token expirado ou inválido para {fonte or url}", fonte=fonte, status=status)
        if 200 <= status < 300:
            return r
        if _should_retry_status(status) and tentativa < retries:
            sleep(backoff_delay(tentativa))
            tentativa += 1
            continue

        body_preview = (r.text or "")[:1000].replace("\n", " ")
        logger.error("GET failed: %s | %s | %s", url, status, body_preview)
        raise GatewayUnavailable(f"HTTP {status} em {url}", fonte=fonte, status=status)


def parse_json(r: requests.Response, *, fonte: Optional[str] = None) -> Any:
    try:
        return r.json()
    except ValueError as e:
        raise MalformedResponse(f"Resposta não é JSON válido ({fonte or r.url})", fonte=fonte) from e


def get_json(session: requests.Session, url: str, **kwargs: Any) -> Any:
    r = get_response(session, url, **kwargs)
    return parse_json(r, fonte=kwargs.get("fonte"))
