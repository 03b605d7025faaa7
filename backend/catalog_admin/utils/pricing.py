from decimal import Decimal
from typing import Optional, Sequence, Tuple

CENT = Decimal("0.01")


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary float expansion
    return Decimal(str(value))


def derive_price_and_stock(
    base_price, options: Sequence, color: Optional[object] = None
) -> Tuple[Decimal, int]:
    """
    Price and stock of one combination.

    options: one object per axis exposing `price_adjustment` and `stock`
    color: optional object exposing `stock`; colors never change the price

    final price = base price + sum of the option adjustments (in cents)
    final stock = lowest stock among the options and the color
    A result of 0 stock is still a valid (out of stock) SKU.
    """
    price = _as_decimal(base_price)
    for opt in options:
        price += _as_decimal(opt.price_adjustment or 0)

    stocks = [int(opt.stock) for opt in options]
    if color is not None:
        stocks.append(int(color.stock))
    stock = min(stocks) if stocks else 0

    return price.quantize(CENT), max(0, stock)
