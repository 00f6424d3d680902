"""Choosing which update to apply for each outdated dependency."""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping

from pydantic import BaseModel

from .deps import DependencyMap
from .models import DependencyKey, VersionUpdate
from .span import Location
from .update_options import Tier, UpdateOptions, compute_update_options
from .versions import Version, parse_version


class Candidate(BaseModel):
    """An outdated dependency together with its upgrade options.

    Attributes:
        tier: The tier currently chosen; starts at the options' default.
    """

    organization: str
    artifact: str
    version: Version
    locations: list[Location]
    options: UpdateOptions
    tier: Tier

    @property
    def key(self) -> DependencyKey:
        return (self.organization, self.artifact)

    def target(self, tier: Tier | None = None) -> Version | None:
        return self.options.get(tier or self.tier)

    def cycle_tier(self, step: int = 1) -> Tier:
        """Move to the next (or previous) tier that has a candidate."""
        tier = self.tier
        for _ in Tier:
            tier = tier.next() if step > 0 else tier.prev()
            if self.options.get(tier) is not None:
                break
        self.tier = tier
        return tier


def build_candidates(
    dep_map: DependencyMap,
    available: Mapping[DependencyKey, list[str]],
    *,
    exclude: Callable[[str, str], bool] | None = None,
) -> list[Candidate]:
    """Compute update options for every entry; entries with none are omitted.

    Args:
        dep_map: The project's merged dependencies.
        available: Raw version strings per key, as returned by a registry.
        exclude: Predicate on (organization, artifact) for entries to skip.
    """
    candidates: list[Candidate] = []
    for (organization, artifact), entry in dep_map:
        if exclude is not None and exclude(organization, artifact):
            continue
        versions = [parse_version(v) for v in available.get((organization, artifact), [])]
        options = compute_update_options(entry.version, versions)
        if options is None:
            continue
        candidates.append(
            Candidate(
                organization=organization,
                artifact=artifact,
                version=entry.version,
                locations=list(entry.locations),
                options=options,
                tier=options.default_tier(),
            )
        )
    return candidates


def select(
    candidates: list[Candidate],
    *,
    tier: Tier | None = None,
    only: Collection[DependencyKey] | None = None,
    fallback: bool = False,
) -> list[tuple[Candidate, Version]]:
    """Pick the new version for each candidate.

    Args:
        candidates: Output of ``build_candidates``.
        tier: Tier to apply to every candidate; None uses each one's own tier.
        only: Restrict to these keys.
        fallback: When ``tier`` has no candidate for an entry, use the
                  entry's own tier instead of skipping it.
    """
    chosen: list[tuple[Candidate, Version]] = []
    for candidate in candidates:
        if only is not None and candidate.key not in only:
            continue
        target = candidate.target(tier)
        if target is None and fallback:
            target = candidate.target()
        if target is not None:
            chosen.append((candidate, target))
    return chosen


def plan_updates(
    candidates: list[Candidate],
    *,
    tier: Tier | None = None,
    only: Collection[DependencyKey] | None = None,
    fallback: bool = False,
) -> list[VersionUpdate]:
    """Same as ``select``, reduced to (version, locations) pairs for writing."""
    return [
        VersionUpdate(version=target, locations=candidate.locations)
        for candidate, target in select(candidates, tier=tier, only=only, fallback=fallback)
    ]
