"""Lucrômetro: painel de lucratividade Shopify + Appmax + Meta Ads."""
__version__ = "0.1.0"
