from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from lucrometro.config.paths import painel_log_dir


def setup_logger(nome: str, *, level: int = logging.INFO, log_dir: Path | None = None) -> Path:
    """
    Configura o logging dos scripts: arquivo em LOGS_DIR/painel + tela.
    Retorna o caminho do arquivo de log.
    """
    base = Path(log_dir) if log_dir else painel_log_dir()
    base.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = base / f"{nome}_{stamp}.log"
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        handlers=[logging.FileHandler(log_file, encoding="utf-8"), logging.StreamHandler()],
    )
    # urllib3 só a partir de WARNING
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))
    logging.info("Log em %s", log_file)
    return log_file
