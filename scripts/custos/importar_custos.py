# scripts/custos/importar_custos.py
from __future__ import annotations
import argparse
import sys
from pathlib import Path

from lucrometro.utils.custos.service import carregar_custos_arquivo, salvar_custos

USO = "Uso: python -m scripts.custos.importar_custos --arquivo custos.json [--destino custos.yaml]"

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Substitui as tabelas de custo a partir de um JSON/YAML.")
    ap.add_argument("--arquivo", required=True, help="JSON ou YAML com product_costs, shipping_costs, tax_rate, fixed_per_order.")
    ap.add_argument("--destino", default=None, help="Destino (default: CUSTOS_YAML ou DATA_DIR/custos/custos.yaml).")
    args = ap.parse_args(argv)

    src = Path(args.arquivo)
    if not src.exists():
        print(f"[ERRO] Arquivo não encontrado: {src}")
        return 1
    try:
        tables = carregar_custos_arquivo(src)
    except ValueError as e:
        print(f"[ERRO] {e}")
        return 1

    out = salvar_custos(tables, Path(args.destino) if args.destino else None)
    print(f"[OK] {len(tables.product_costs)} produtos, {len(tables.shipping_costs)} fretes, "
          f"imposto {tables.tax_rate:.2f}%, taxa fixa {tables.fixed_per_order:.2f} -> {out}")
    return 0

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
