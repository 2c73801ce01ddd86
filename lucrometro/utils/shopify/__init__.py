from .client import ShopifyClient, fetch_shipping_rates

__all__ = ["ShopifyClient", "fetch_shipping_rates"]
