"""Invoice arithmetic shared by invoice creation, preview and PDF export.

Amounts are ``Decimal`` end to end. Inputs (unit price, tax rate, discount)
are brought to the two-place scale they are stored at before any arithmetic,
so totals recomputed from a stored invoice match the ones saved with it.
Nothing is rounded while accumulating; ``money()`` rounds derived values only
when they are stored or displayed.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from ..config import settings
from ..errors import InvalidInput

ZERO = Decimal("0")
CENT = Decimal("0.01")


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    discount: Decimal
    total: Decimal

    def rounded(self) -> "InvoiceTotals":
        return InvoiceTotals(
            subtotal=money(self.subtotal),
            tax_rate=self.tax_rate,
            tax_amount=money(self.tax_amount),
            discount=money(self.discount),
            total=money(self.total),
        )


def money(value) -> Decimal:
    return _decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value, field: str = "amount") -> Decimal:
    """Parse a non-negative decimal; blank or missing means zero."""
    if _is_blank(value):
        return ZERO
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be a number.")
    try:
        amount = _decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, ValueError):
        raise InvalidInput(f"{field} must be a number.") from None
    if not amount.is_finite():
        raise InvalidInput(f"{field} must be a number.")
    if amount < 0:
        raise InvalidInput(f"{field} cannot be negative.")
    return amount


def parse_quantity(value, field: str = "quantity") -> int:
    if _is_blank(value):
        return 1
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be a whole number.")
    try:
        quantity = _decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, ValueError):
        raise InvalidInput(f"{field} must be a whole number.") from None
    if not quantity.is_finite() or quantity != quantity.to_integral_value():
        raise InvalidInput(f"{field} must be a whole number.")
    if quantity < 1:
        raise InvalidInput(f"{field} must be at least 1.")
    return int(quantity)


def parse_line_item(raw: Mapping, position: int = 1) -> LineItem:
    label = f"Item {position}"
    errors: list[str] = []
    quantity = 1
    unit_price = ZERO
    try:
        quantity = parse_quantity(raw.get("quantity"), f"{label} quantity")
    except InvalidInput as exc:
        errors.extend(exc.errors)
    try:
        unit_price = parse_amount(raw.get("unit_price"), f"{label} unit price")
    except InvalidInput as exc:
        errors.extend(exc.errors)
    if errors:
        raise InvalidInput(errors)
    return LineItem(
        description=str(raw.get("description") or "").strip(),
        quantity=quantity,
        unit_price=money(unit_price),
    )


def compute_totals(
    items: Iterable[LineItem], tax_rate=None, discount=None
) -> InvoiceTotals:
    rate = money(parse_amount(tax_rate, "Tax rate"))
    flat_discount = money(parse_amount(discount, "Discount"))

    subtotal = sum((item.line_total for item in items), ZERO)
    tax_amount = subtotal * rate / Decimal("100")
    # Negative totals are allowed when the discount exceeds subtotal + tax.
    total = subtotal + tax_amount - flat_discount
    return InvoiceTotals(
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        discount=flat_discount,
        total=total,
    )


def format_currency(
    value, label: str | None = None, grouping: str | None = None
) -> str:
    label = settings.currency_label if label is None else label
    grouping = settings.currency_grouping if grouping is None else grouping

    amount = money(value)
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")
    return f"{label} {sign}{_group_digits(whole, grouping)}.{fraction}".strip()


def _group_digits(whole: str, grouping: str) -> str:
    if grouping != "indian" or len(whole) <= 3:
        return f"{int(whole):,}"
    # Indian grouping: last three digits, then pairs (12,34,567).
    head, tail = whole[:-3], whole[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])
