from decimal import Decimal, ROUND_HALF_UP

MINOR_UNITS_PER_MAJOR = Decimal("100")


def quantize_money(value: Decimal | float | int | str | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_major_units(minor_units: Decimal | int | None) -> Decimal:
    """Convert an aggregated cent total into currency units, once, at the end."""
    return quantize_money(Decimal(minor_units or 0) / MINOR_UNITS_PER_MAJOR)


def format_amount(value: Decimal | int | None) -> str:
    """Render an amount with at least one decimal digit, e.g. ``20000.0`` or ``123.45``."""
    text = format(quantize_money(value or 0).normalize(), "f")
    return text if "." in text else f"{text}.0"


def to_minor_units(amount: Decimal | int | str) -> int:
    """Convert a currency amount to whole cents, rounding half up."""
    return int(quantize_money(amount) * MINOR_UNITS_PER_MAJOR)
