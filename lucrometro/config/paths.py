from __future__ import annotations
import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# .env da raiz (ou do cwd) antes de ler qualquer variável
load_dotenv(find_dotenv(usecwd=True))

# ----------------------------- util internos -----------------------------
def _expand_path(p: str | os.PathLike | None) -> Optional[Path]:
    if p is None:
        return None
    s = str(p).strip().strip('"').strip("'")
    if not s:
        return None
    s = os.path.expandvars(os.path.expanduser(s))
    try:
        return Path(s).resolve()
    except OSError:
        return Path(s)

def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default

def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default

def ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p

def get_timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")

def backup_path(target: Path) -> Path:
    """
    Caminho de backup padronizado para `target`:
    <dir>/backup/<stem>_<timestamp><suffix>.
    """
    target = Path(target)
    bdir = ensure_dir(target.parent / "backup")
    return bdir / f"{target.stem}_{get_timestamp()}{target.suffix}"

# ----------------------------- Enums padrão ------------------------------
class Fonte(str, Enum):
    SHOPIFY = "shopify"
    FACEBOOK = "facebook"
    CAMBIO = "cambio"

class Camada(str, Enum):
    RESULTS = "results"

# --------------------------- Variáveis de ambiente ------------------------
BASE_PATH    = _expand_path(os.getenv("BASE_PATH", "~/.lucrometro")) or Path.home() / ".lucrometro"
DATA_DIR     = _expand_path(os.getenv("DATA_DIR", str(BASE_PATH / "data"))) or (BASE_PATH / "data")
LOGS_DIR     = _expand_path(os.getenv("LOGS_DIR", str(BASE_PATH / "logs"))) or (BASE_PATH / "logs")
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Sao_Paulo")

HTTP_TIMEOUT_SEC = _env_float("HTTP_TIMEOUT_SEC", 10.0)
HTTP_RETRIES     = _env_int("HTTP_RETRIES", 3)

# Shopify (worker de borda ou Admin API direta)
SHOPIFY_WORKER_URL       = os.getenv("SHOPIFY_WORKER_URL", "").strip().rstrip("/")
SHOPIFY_STORE_URL        = os.getenv("SHOPIFY_STORE_URL", "").strip().rstrip("/")
SHOPIFY_ACCESS_TOKEN     = os.getenv("SHOPIFY_ACCESS_TOKEN", "").strip()
SHOPIFY_API_VERSION      = os.getenv("SHOPIFY_API_VERSION", "2024-01").strip()
SHOPIFY_ORDERS_LIMIT     = _env_int("SHOPIFY_ORDERS_LIMIT", 250)
SHOPIFY_ORDERS_MAX_PAGES = _env_int("SHOPIFY_ORDERS_MAX_PAGES", 1)

# Meta Ads
FB_API_BASE      = os.getenv("FB_API_BASE", "https://graph.facebook.com/v19.0").rstrip("/")
FB_AD_ACCOUNT_ID = os.getenv("FB_AD_ACCOUNT_ID", "").strip()
FB_ACCESS_TOKEN  = os.getenv("FB_ACCESS_TOKEN", "").strip()
ADS_CURRENCY     = os.getenv("ADS_CURRENCY", "BRL").strip().upper()

# Câmbio USD→BRL
EXCHANGE_API_BASE      = os.getenv("EXCHANGE_API_BASE", "https://api.exchangerate-api.com/v4/latest").rstrip("/")
EXCHANGE_FALLBACK_RATE = _env_float("EXCHANGE_FALLBACK_RATE", 5.0)
EXCHANGE_CACHE_TTL_SEC = _env_int("EXCHANGE_CACHE_TTL_SEC", 3600)

# --------------------------- Domínio: CUSTOS ------------------------------
CUSTOS_DIR = DATA_DIR / "custos"

def custos_yaml() -> Path:
    """Tabelas de custo (produto, frete, imposto, taxa fixa por pedido)."""
    override = _expand_path(os.getenv("CUSTOS_YAML"))
    return override or (CUSTOS_DIR / "custos.yaml")

# --------------------------- Domínio: PAINEL ------------------------------
PAINEL_DIR = DATA_DIR / "painel"

def painel_results_dir() -> Path:
    return ensure_dir(PAINEL_DIR / Camada.RESULTS.value)

def painel_resumo_json(label: str) -> Path:
    slug = "".join(ch if ch.isalnum() else "_" for ch in label.lower()).strip("_") or "periodo"
    return painel_results_dir() / f"resumo_{slug}.json"

# --------------------------- Logs por domínio ----------------------------
def painel_log_dir() -> Path:
    return ensure_dir(LOGS_DIR / "painel")

def ensure_dirs() -> None:
    ensure_dir(CUSTOS_DIR)
    painel_results_dir()
    painel_log_dir()
