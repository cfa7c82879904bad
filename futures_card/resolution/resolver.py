"""
Contract name resolution against the main contract directory.

A free-text name is matched in two passes over the directory: an exact pass
on the variety short name, full name and code, then, only if nothing matched,
a substring pass on the short and full names. Within a pass the tie-break
strategy picks one candidate; the default keeps directory order.
"""

from typing import Callable, Optional, Sequence

from ..data.models import ContractDirectoryEntry, ResolvedContract
from ..errors import ContractNotFoundError
from ..logging.config import get_logger

logger = get_logger(__name__)

TieBreak = Callable[[Sequence[ContractDirectoryEntry]], ContractDirectoryEntry]


def first_match(candidates: Sequence[ContractDirectoryEntry]) -> ContractDirectoryEntry:
    """Pick the first candidate in directory order."""
    return candidates[0]


def shortest_name(candidates: Sequence[ContractDirectoryEntry]) -> ContractDirectoryEntry:
    """Pick the candidate with the shortest short name; directory order breaks ties."""
    return min(candidates, key=lambda entry: len(entry.variety_short_name))


TIE_BREAKS: dict[str, TieBreak] = {
    "first": first_match,
    "shortest": shortest_name,
}


def get_tie_break(name: str) -> TieBreak:
    """Look up a tie-break strategy by its configuration name."""
    try:
        return TIE_BREAKS[name]
    except KeyError:
        raise ValueError(f"Unknown tie-break strategy: {name!r}") from None


def normalize_name(name: str) -> str:
    return name.strip().lower()


def _is_resolvable(entry: ContractDirectoryEntry) -> bool:
    return bool(entry.market) and bool(entry.contract_code)


def _exact_candidates(search: str, directory: Sequence[ContractDirectoryEntry]) -> list[ContractDirectoryEntry]:
    return [
        entry for entry in directory
        if _is_resolvable(entry) and search in (
            entry.variety_short_name.lower(),
            entry.variety_name.lower(),
            entry.variety.lower(),
        )
    ]


def _fuzzy_candidates(search: str, directory: Sequence[ContractDirectoryEntry]) -> list[ContractDirectoryEntry]:
    return [
        entry for entry in directory
        if _is_resolvable(entry) and (
            search in entry.variety_short_name.lower()
            or search in entry.variety_name.lower()
        )
    ]


def match_contract(name: str, directory: Sequence[ContractDirectoryEntry],
                   tie_break: TieBreak = first_match) -> Optional[ResolvedContract]:
    """
    Match a contract name against the directory.

    Args:
        name: Free-text variety name, e.g. "玻璃", "glass", "FG"
        directory: Directory entries in service order
        tie_break: Picks one entry when a pass yields several

    Returns:
        The resolved contract, or None when nothing matches
    """
    search = normalize_name(name)
    if not search:
        return None

    candidates = _exact_candidates(search, directory)
    match_pass = "exact"
    if not candidates:
        candidates = _fuzzy_candidates(search, directory)
        match_pass = "fuzzy"

    if not candidates:
        return None

    chosen = tie_break(candidates)
    logger.debug(
        "Contract matched",
        contract_name=name,
        match_pass=match_pass,
        candidate_count=len(candidates),
        contract_code=chosen.contract_code,
        market=chosen.market,
    )
    return ResolvedContract.from_entry(chosen)


def resolve_contract(name: str, directory: Sequence[ContractDirectoryEntry],
                     tie_break: TieBreak = first_match) -> ResolvedContract:
    """
    Resolve a contract name, raising when nothing matches.

    Raises:
        ContractNotFoundError: If neither pass finds a match
    """
    resolved = match_contract(name, directory, tie_break)
    if resolved is None:
        logger.warning("No contract matches name", contract_name=name,
                       directory_size=len(directory))
        raise ContractNotFoundError(
            f'Contract "{name}" not found, please check the contract name',
            contract_name=name,
        )
    return resolved


class ContractResolver:
    """Resolver bound to a configured tie-break strategy."""

    def __init__(self, tie_break: str = "first"):
        self.tie_break_name = tie_break
        self.tie_break = get_tie_break(tie_break)

    def resolve(self, name: str, directory: Sequence[ContractDirectoryEntry]) -> ResolvedContract:
        return resolve_contract(name, directory, self.tie_break)
