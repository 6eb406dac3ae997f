# storefront/services/pricing.py
"""
Cart pricing.

Pure functions over ``Decimal``; nothing here touches the database.
Amounts are not rounded to currency subunits: results carry whatever scale
the stored price (2 places) and tax rate (4 places) produce, so a line of
2 x 100.00 at 0.1000 yields a tax of 20.000000.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Tuple

ZERO = Decimal("0")


@dataclass(frozen=True)
class LinePrice:
    subtotal: Decimal
    tax: Decimal


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal = ZERO
    total_tax: Decimal = ZERO
    total: Decimal = ZERO


def price_line(quantity: int, unit_price: Decimal, tax_rate: Decimal) -> LinePrice:
    subtotal = quantity * Decimal(unit_price)
    return LinePrice(subtotal=subtotal, tax=subtotal * Decimal(tax_rate))


def summarize(lines: Iterable[LinePrice]) -> Totals:
    subtotal = ZERO
    total_tax = ZERO
    for line in lines:
        subtotal += line.subtotal
        total_tax += line.tax
    return Totals(subtotal=subtotal, total_tax=total_tax, total=subtotal + total_tax)


def price_cart(lines: Iterable[Tuple[int, Decimal, Decimal]]) -> Tuple[List[LinePrice], Totals]:
    """Price ``(quantity, unit_price, tax_rate)`` tuples and aggregate them."""
    priced = [price_line(quantity, price, tax_rate) for quantity, price, tax_rate in lines]
    return priced, summarize(priced)
