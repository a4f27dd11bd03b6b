"""Contributor identity merging.

Commit history spells the same person in several ways ("Jane Doe",
"jane doe", "Jane  Doe"). Merging runs in two phases: raw names are first
grouped into buckets by normalized key, then each bucket is reduced to one
Contributor independently of the others.
"""

import logging
from typing import Iterable, Mapping, Optional

from credits_tracker.models import Contributor, normalize_name

logger = logging.getLogger(__name__)


def collapse_whitespace(name: str) -> str:
    """Trim a name and collapse internal whitespace runs to one space."""
    return " ".join(name.split())


def capitalized_words(name: str) -> int:
    """Count the words of a name that start with an uppercase letter."""
    return sum(1 for word in name.split() if word[0].isupper())


def apply_aliases(
    raw_names: Iterable[str], aliases: Optional[Mapping[str, str]] = None
) -> list[str]:
    """Replace aliased author names with their canonical form.

    Alias keys are matched on the normalized name, so an alias for
    "kamaal111" also applies to "Kamaal111 ".

    Args:
        raw_names: Author names as found in history.
        aliases: Mapping of alias to canonical display name.

    Returns:
        List of names with aliases substituted, in input order.
    """
    if not aliases:
        return list(raw_names)

    lookup = {normalize_name(alias): canonical for alias, canonical in aliases.items()}
    return [lookup.get(normalize_name(name), name) for name in raw_names]


def group_names(raw_names: Iterable[str]) -> dict[str, list[str]]:
    """Group raw names into buckets keyed by normalized name.

    Blank names are dropped. Variants are stored whitespace-collapsed and
    buckets keep the order in which their first variant was seen.

    Args:
        raw_names: Author names, one per commit.

    Returns:
        Mapping of normalized key to the name variants in that bucket.
    """
    buckets: dict[str, list[str]] = {}
    for raw_name in raw_names:
        name = collapse_whitespace(raw_name)
        if not name:
            continue
        buckets.setdefault(normalize_name(name), []).append(name)
    return buckets


def pick_display_name(variants: list[str]) -> str:
    """Choose the display name of a bucket.

    Prefers the variant with the most capitalized words, then the longest
    one, then the first one encountered.

    Args:
        variants: Non-empty list of whitespace-collapsed name variants.

    Returns:
        The chosen variant.
    """
    best = variants[0]
    for variant in variants[1:]:
        if (capitalized_words(variant), len(variant)) > (
            capitalized_words(best),
            len(best),
        ):
            best = variant
    return best


def reduce_bucket(variants: list[str]) -> Contributor:
    """Reduce one bucket of name variants to a Contributor."""
    return Contributor(name=pick_display_name(variants), contributions=len(variants))


def merge_contributors(
    raw_names: Iterable[str], aliases: Optional[Mapping[str, str]] = None
) -> list[Contributor]:
    """Merge raw commit author names into distinct contributors.

    Args:
        raw_names: Author names, one per commit, duplicates retained.
        aliases: Optional mapping of alias to canonical display name,
            applied before grouping.

    Returns:
        One Contributor per normalized key, in discovery order.
    """
    buckets = group_names(apply_aliases(raw_names, aliases))
    contributors = [reduce_bucket(variants) for variants in buckets.values()]
    logger.debug(f"Merged authors into {len(contributors)} contributors")
    return contributors
