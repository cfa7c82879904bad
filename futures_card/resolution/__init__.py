"""Contract name resolution against the main contract directory."""

from .resolver import (
    ContractResolver,
    first_match,
    match_contract,
    resolve_contract,
    shortest_name,
)

__all__ = [
    "ContractResolver",
    "match_contract",
    "resolve_contract",
    "first_match",
    "shortest_name",
]
