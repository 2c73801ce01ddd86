# scripts/painel/gerar_resumo.py
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

from lucrometro.config.paths import ensure_dirs, painel_resumo_json
from lucrometro.dashboard.painel.compositor import tabela_resumo
from lucrometro.utils.cambio.client import ExchangeRateClient
from lucrometro.utils.core.errors import InvalidCredential, PainelError
from lucrometro.utils.core.io import atomic_write_json
from lucrometro.utils.core.logs import setup_logger
from lucrometro.utils.facebook.client import FacebookAdsClient
from lucrometro.utils.painel.service import atualizar_painel
from lucrometro.utils.shopify.client import ShopifyClient

USO = 'Uso: python -m scripts.painel.gerar_resumo --timeframe "Last 7 Days" [--to-file] [--xlsx]'

def _exportar_xlsx(snap, out: Path) -> Path:
    df = tabela_resumo(snap)
    with pd.ExcelWriter(out, engine="openpyxl") as xw:
        df.to_excel(xw, sheet_name="resumo", index=False)
        pd.DataFrame([snap.to_dict()["periodo"]]).to_excel(xw, sheet_name="periodo", index=False)
    return out

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Gera o resumo do painel para um período.")
    ap.add_argument("--timeframe", default="Today",
                    help='Preset ("Today", "Last 7 Days"...) ou "dd/mm/aaaa - dd/mm/aaaa".')
    ap.add_argument("--to-file", action="store_true",
                    help="Grava resumo_<periodo>.json em results/; caso contrário só imprime.")
    ap.add_argument("--xlsx", action="store_true", help="Também exporta a tabela em .xlsx (openpyxl).")
    args = ap.parse_args(argv)

    ensure_dirs()
    setup_logger("gerar_resumo")
    try:
        snap = atualizar_painel(
            args.timeframe,
            shopify=ShopifyClient.from_env(),
            ads=FacebookAdsClient.from_env(),
            cambio=ExchangeRateClient(),
        )
    except InvalidCredential as e:
        logging.error("Credencial inválida (%s): %s", e.fonte, e.message)
        return 2
    except (PainelError, ValueError) as e:
        logging.error("Falha ao gerar resumo: %s", e)
        return 1

    payload = snap.to_dict()
    if args.to_file or args.xlsx:
        out = painel_resumo_json(snap.periodo.label)
        atomic_write_json(out, payload, do_backup=True)
        print(f"[OK] resumo materializado: {out}")
        if args.xlsx:
            xlsx = _exportar_xlsx(snap, out.with_suffix(".xlsx"))
            print(f"[OK] xlsx: {xlsx}")
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
