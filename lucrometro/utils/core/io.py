# lucrometro/utils/core/io.py
from __future__ import annotations

import json
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Any

from lucrometro.config.paths import backup_path

REPLACE_RETRIES = 5
REPLACE_WAIT_SEC = 0.6


def _replace(tmp: Path, target: Path, retries: int = REPLACE_RETRIES, wait_secs: float = REPLACE_WAIT_SEC) -> None:
    """os.replace com retry: no Windows o destino pode estar aberto (Excel/antivírus)."""
    for tentativa in range(max(1, retries)):
        try:
            os.replace(tmp, target)
            return
        except PermissionError:
            if tentativa == retries - 1:
                raise
            time.sleep(wait_secs)


def atomic_write_text(target: Path, text: str, *, do_backup: bool = True, suffix: str = ".tmp") -> Path:
    """
    Escreve `text` em `target` sem deixar arquivo pela metade:
    backup opcional em <dir>/backup/, temporário no mesmo diretório e troca atômica.
    Se a troca falhar, o temporário é removido e o erro sobe.
    """
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)

    if do_backup and target.exists():
        shutil.copy2(target, backup_path(target))

    fd, tmp_name = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.stem}_", suffix=suffix)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        _replace(tmp_path, target)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return target


def atomic_write_json(target: Path, obj: Any, do_backup: bool = True) -> Path:
    return atomic_write_text(
        target,
        json.dumps(obj, ensure_ascii=False, indent=2),
        do_backup=do_backup,
        suffix=".json",
    )
