"""Card metrics derivation and display formatting"""

from .calculator import MetricsCalculator, derive_metrics, extract_contract_code, round_half_away
from .formatting import format_change_amount, format_change_percent, format_price

__all__ = [
    "MetricsCalculator",
    "derive_metrics",
    "extract_contract_code",
    "round_half_away",
    "format_price",
    "format_change_percent",
    "format_change_amount",
]
