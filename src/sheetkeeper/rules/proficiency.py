"""Proficiency membership sets for skills and saving throws."""

from collections.abc import Iterable

ProficiencySet = frozenset[str]


def make_set(names: Iterable[str] = ()) -> ProficiencySet:
    """Build a proficiency set from any iterable of names."""
    return frozenset(names)


def toggle(current: Iterable[str], name: str, is_proficient: bool) -> ProficiencySet:
    """
    Return a new set with ``name`` present iff ``is_proficient``.

    Idempotent: turning on an existing member or turning off a missing one
    yields an equal set. The input is never modified.
    """
    members = frozenset(current)
    if is_proficient:
        return members | {name}
    return members - {name}
