"""
Key set algebra over parsed .env mappings.

Pure functions: missing/extra/changed keys between two mappings, an
ordered merge, and the sync strategies built from that merge.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class SyncStrategy(Enum):
    """How a source mapping is combined into a target mapping."""
    MERGE = "merge"          # source wins, target extras survive
    OVERWRITE = "overwrite"  # target becomes a copy of source
    PRESERVE = "preserve"    # target wins, source only fills gaps


@dataclass
class KeySetComparison:
    """Result of comparing mapping a against mapping b."""
    missing: List[str] = field(default_factory=list)
    extra: List[str] = field(default_factory=list)
    changed: List[str] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return not (self.missing or self.extra or self.changed)


def missing_keys(a: Dict[str, str], b: Dict[str, str]) -> List[str]:
    """
    Keys present in b but absent from a.

    Args:
        a: Mapping being checked
        b: Reference mapping

    Returns:
        Keys in b's order
    """
    return [key for key in b if key not in a]


def extra_keys(a: Dict[str, str], b: Dict[str, str]) -> List[str]:
    """
    Keys present in a but absent from b.

    Args:
        a: Mapping being checked
        b: Reference mapping

    Returns:
        Keys in a's order
    """
    return [key for key in a if key not in b]


def changed_keys(a: Dict[str, str], b: Dict[str, str]) -> List[str]:
    """Keys present in both mappings whose values differ exactly."""
    return [key for key, value in a.items() if key in b and b[key] != value]


def merge(*mappings: Dict[str, str]) -> Dict[str, str]:
    """
    Merge mappings left to right; later mappings win on conflicts.

    Keys keep the position of their first appearance.
    """
    merged: Dict[str, str] = {}
    for mapping in mappings:
        merged.update(mapping)
    return merged


def compare(a: Dict[str, str], b: Dict[str, str]) -> KeySetComparison:
    return KeySetComparison(
        missing=missing_keys(a, b),
        extra=extra_keys(a, b),
        changed=changed_keys(a, b),
    )


def parse_strategy(value) -> SyncStrategy:
    """
    Coerce a strategy name to SyncStrategy.

    Raises:
        ValueError: If the name is not a known strategy
    """
    if isinstance(value, SyncStrategy):
        return value

    try:
        return SyncStrategy(str(value).lower())
    except ValueError:
        choices = ", ".join(s.value for s in SyncStrategy)
        raise ValueError(f"Unknown sync strategy '{value}' (expected one of: {choices})")


def apply_strategy(
    source: Dict[str, str],
    target: Dict[str, str],
    strategy: SyncStrategy = SyncStrategy.MERGE
) -> Dict[str, str]:
    """
    Combine source into target according to a sync strategy.

    Args:
        source: Mapping keys are synced from
        target: Mapping being updated
        strategy: SyncStrategy to apply

    Returns:
        New mapping for the target file
    """
    if strategy == SyncStrategy.OVERWRITE:
        return merge(source)

    if strategy == SyncStrategy.PRESERVE:
        gaps = {key: source[key] for key in missing_keys(target, source)}
        return merge(target, gaps)

    return merge(target, source)
