"""
Futures Card - Contract resolution and price-series derivation

Resolves a free-text futures variety name to its main contract, fetches the
recent daily kline series from the quoting service and derives the metrics
shown on a strategy card (price, change, change percent, contract, date).
"""

__version__ = "0.1.0"
__author__ = "Futures Card Team"
