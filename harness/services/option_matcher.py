"""
Deterministic option matching.

Pure functions over an OptionSnapshot; no browser involved. Rules are tried in
a fixed priority order and the first rule that matches anything decides:

1. exact, case-sensitive equality
2. equality after stripping leading/trailing whitespace
3. substring containment

The deciding rule must produce exactly one candidate. Several candidates are a
NotFound carrying all of them: labels such as "Acme East" and "Acme West" are
common and picking either one would select the wrong real-world entity.
"""

from collections.abc import Callable

from harness.errors import OptionNotFoundError
from harness.models.results import Found, MatchResult, NotFound, OptionSnapshot

Rule = Callable[[str, str], bool]


def _exact(label: str, target: str) -> bool:
    return label == target


def _trimmed(label: str, target: str) -> bool:
    return label.strip() == target.strip()


def _contains(label: str, target: str) -> bool:
    return target.strip() in label


MATCH_RULES: tuple[tuple[str, Rule], ...] = (
    ("exact", _exact),
    ("trimmed", _trimmed),
    ("substring", _contains),
)


def match_option(snapshot: OptionSnapshot, target: str) -> MatchResult:
    """
    Select exactly one label from the snapshot.

    Raises:
        ValueError: If target is empty or whitespace; it would match every label.
    """
    if not target or not target.strip():
        raise ValueError("Option target must be a non-blank string")

    for _, rule in MATCH_RULES:
        indexes = [i for i, label in enumerate(snapshot.labels) if rule(label, target)]
        if not indexes:
            continue
        if len(indexes) == 1:
            return Found(label=snapshot.labels[indexes[0]], index=indexes[0])
        return NotFound(
            searched=target,
            available=snapshot,
            candidates=tuple(snapshot.labels[i] for i in indexes),
        )

    return NotFound(searched=target, available=snapshot)


def require_match(snapshot: OptionSnapshot, target: str) -> Found:
    """match_option, raising OptionNotFoundError with the full option list on NotFound."""
    result = match_option(snapshot, target)
    if isinstance(result, NotFound):
        raise OptionNotFoundError(result.searched, result.available.labels, result.candidates)
    return result
