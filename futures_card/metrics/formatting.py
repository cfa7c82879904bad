"""Display formatting for card metrics."""


def format_price(price: float, decimals: int = 2) -> str:
    """Fixed-decimal price string."""
    return f"{price:.{decimals}f}"


def format_change_percent(percent: float) -> str:
    """Signed percent string, e.g. +3.92%."""
    sign = "+" if percent >= 0 else ""
    return f"{sign}{percent:.2f}%"


def format_change_amount(amount: float) -> str:
    """Signed amount string, e.g. +4.00."""
    sign = "+" if amount >= 0 else ""
    return f"{sign}{amount:.2f}"
