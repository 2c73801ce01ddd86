from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from lucrometro.utils.core.io import atomic_write_text
from .config import get_custos_path
from .schema import CostTables

__all__ = ["carregar_custos", "salvar_custos", "carregar_custos_arquivo"]

logger = logging.getLogger(__name__)


def _read_yaml(p: Path) -> Dict[str, Any]:
    with open(p, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Tabela de custos ilegível em {p}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Tabela de custos inválida em {p}: esperado um mapeamento")
    return data


def carregar_custos(path: Optional[Path] = None) -> CostTables:
    """
    Lê o snapshot das tabelas de custo. Arquivo ausente => defaults
    (sem custos de produto/frete, imposto 7.23%, taxa fixa 0).
    """
    p = Path(path) if path else get_custos_path()
    if not p.exists():
        logger.info("Tabela de custos não encontrada em %s; usando defaults", p)
        return CostTables()
    return CostTables.from_dict(_read_yaml(p))


def carregar_custos_arquivo(path: Path) -> CostTables:
    """Carrega custos de um JSON ou YAML qualquer (usado pelo script de importação)."""
    # YAML é superconjunto de JSON
    return CostTables.from_dict(_read_yaml(Path(path)))


def salvar_custos(tables: CostTables, path: Optional[Path] = None) -> Path:
    """Grava as tabelas (atômico + backup)."""
    p = Path(path) if path else get_custos_path()
    text = yaml.safe_dump(tables.to_dict(), allow_unicode=True, sort_keys=True)
    return atomic_write_text(p, text, do_backup=True, suffix=".yaml")
