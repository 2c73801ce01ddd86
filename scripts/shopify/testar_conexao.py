# scripts/shopify/testar_conexao.py
from __future__ import annotations
import json
import sys

from lucrometro.utils.shopify.client import ShopifyClient

def main() -> int:
    try:
        client = ShopifyClient.from_env()
    except ValueError as e:
        print(f"[ERRO] {e}")
        return 1
    modo = "admin" if client.is_admin else "worker"
    print(f"[INFO] Testando {client.base_url} (modo={modo})")
    res = client.test_connection()
    print(json.dumps(res, ensure_ascii=False, indent=2))
    return 0 if res.get("is_connected") else 1

if __name__ == "__main__":
    sys.exit(main())
