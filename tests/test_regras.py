from __future__ import annotations

import pytest

from conftest import order
from lucrometro.utils.vendas.shopify.rules import (
    CREDIT_CARD,
    FREE_SHIPPING,
    PIX,
    PREMIUM_SHIPPING,
    is_paid_order,
    payment_method,
    shipping_method,
)
from lucrometro.utils.vendas.shopify.schema import order_from_payload


def _o(**kw):
    return order_from_payload(order(1, 100, **kw))


@pytest.mark.parametrize(
    "kw, pago",
    [
        ({"status": "paid"}, True),
        ({"status": "partially_paid"}, True),
        ({"status": "PAID"}, True),
        ({"status": "pending"}, False),
        ({"status": "refunded"}, False),
        ({"status": "paid", "cancelled_at": "2024-03-15T11:00:00Z"}, False),
        ({"status": "paid", "closed_at": "2024-03-16T11:00:00Z"}, True),
        ({"status": "partially_paid", "closed_at": "2024-03-16T11:00:00Z"}, True),
        ({"status": "refunded", "closed_at": "2024-03-16T11:00:00Z"}, False),
        ({"status": "voided", "closed_at": "2024-03-16T11:00:00Z"}, False),
    ],
)
def test_is_paid_order(kw, pago):
    assert is_paid_order(_o(**kw)) is pago


@pytest.mark.parametrize(
    "gateway, esperado",
    [("pix", PIX), ("Appmax PIX", PIX), ("appmax", CREDIT_CARD), ("stripe", CREDIT_CARD), ("", CREDIT_CARD)],
)
def test_payment_method(gateway, esperado):
    assert payment_method(_o(gateway=gateway)) == esperado


@pytest.mark.parametrize(
    "titulos, esperado",
    [
        (["FRETE GRÁTIS"], FREE_SHIPPING),
        (["Free Shipping"], FREE_SHIPPING),
        (["Frete Premium"], PREMIUM_SHIPPING),
        (["Standard"], None),
        ([], None),
        (["Standard", "FRETE GRÁTIS"], None),
    ],
)
def test_shipping_method_uses_first_line(titulos, esperado):
    assert shipping_method(_o(shipping=titulos)) == esperado


def test_malformed_order_defaults_to_zero():
    o = order_from_payload({
        "id": 9,
        "total_price": "abc",
        "financial_status": None,
        "created_at": "lixo",
        "line_items": [{"product_id": 55, "quantity": "2", "price": "10.5"}, {"quantity": None}, "x"],
        "shipping_lines": None,
    })
    assert o.total_price == 0.0
    assert o.financial_status == ""
    assert o.created_at is None
    assert o.shipping_lines == ()
    assert [(li.product_id, li.quantity, li.price) for li in o.line_items] == [("55", 2, 10.5), (None, 0, 0.0)]
    assert not is_paid_order(o)
