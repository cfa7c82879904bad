"""
Data models and payload parsing module.

Canonical directory, contract, kline and metrics structures plus the parsers
that build them from quoting service responses.
"""
