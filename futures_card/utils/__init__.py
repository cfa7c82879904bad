"""
Utility functions module.

Time Semantics:
- Kline timestamps are epoch milliseconds at the start of the trading day
- The displayed trading date is the calendar date of that instant in the
  exchange timezone when one is configured, else in runtime local time
"""
