from __future__ import annotations

from typing import Optional


class PainelError(RuntimeError):
    """Falha de uma fonte externa do painel. `fonte` indica quem falhou."""

    def __init__(self, message: str, *, fonte: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.fonte = fonte
        self.status = status


class GatewayUnavailable(PainelError):
    """Erro de rede ou status != 2xx."""


class GatewayTimeout(GatewayUnavailable):
    pass


class InvalidCredential(PainelError):
    """Token inválido/expirado (401). Nunca é repetido."""


class MalformedResponse(PainelError):
    """Resposta 2xx sem o corpo esperado."""
