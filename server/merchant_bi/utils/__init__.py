from .money import MINOR_UNITS_PER_MAJOR, format_amount, quantize_money, to_major_units, to_minor_units

__all__ = ["MINOR_UNITS_PER_MAJOR", "format_amount", "quantize_money", "to_major_units", "to_minor_units"]
