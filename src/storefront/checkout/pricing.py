"""Checkout pricing: store-currency total plus the settlement-currency lines sent to the gateway.

One exchange rate is looked up per checkout. Each line's unit price is
converted and rounded to cents, and the settlement total is the sum of
converted unit price times quantity, so the item list the gateway sees
always adds up to the amount it is asked to charge.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.payments.gateway.port import GatewayLineItem
from storefront.shared.money import convert, effective_price, line_total, round_money, to_decimal


@dataclass(frozen=True)
class CheckoutQuote:
    total_amount: Decimal
    settlement_amount: Decimal
    settlement_currency: str
    rate: Decimal
    lines: list[dict]
    gateway_items: list[GatewayLineItem]


def quote_checkout(items: list[dict], rate: Decimal, settlement_currency: str) -> CheckoutQuote:
    total = Decimal("0")
    settlement_total = Decimal("0")
    lines = []
    gateway_items = []

    for item in items:
        quantity = int(item["quantity"])
        unit_price = effective_price(item.get("price"), item.get("sale_price"))
        settlement_unit = convert(unit_price, rate)

        total += to_decimal(unit_price) * quantity
        settlement_total += line_total(settlement_unit, quantity)

        lines.append(
            {
                **item,
                "price": float(item.get("price") or 0.0),
                "sale_price": float(item.get("sale_price") or 0.0),
                "quantity": quantity,
                "settlement_price": float(settlement_unit),
            }
        )
        gateway_items.append(
            GatewayLineItem(
                name=item["title"],
                sku=str(item["product_id"]),
                price=f"{settlement_unit:.2f}",
                quantity=quantity,
            )
        )

    return CheckoutQuote(
        total_amount=round_money(total),
        settlement_amount=round_money(settlement_total),
        settlement_currency=settlement_currency,
        rate=rate,
        lines=lines,
        gateway_items=gateway_items,
    )
