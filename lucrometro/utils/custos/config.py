from __future__ import annotations
from pathlib import Path

from lucrometro.config.paths import custos_yaml

# Defaults da tela de custos
TAX_RATE_DEFAULT = 7.23        # % (impostos + IOF) sobre o valor do pedido pago
FIXED_PER_ORDER_DEFAULT = 0.0  # R$ por pedido pago (taxa PRC)

def get_custos_path() -> Path:
    return custos_yaml()
