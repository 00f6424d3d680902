"""Upgrade candidates per tier (major / minor / patch / pre-release)."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from .versions import ZERO, SemVer, Version


class Tier(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRE_RELEASE = "pre-release"

    def next(self) -> Tier:
        order = list(Tier)
        return order[(order.index(self) + 1) % len(order)]

    def prev(self) -> Tier:
        order = list(Tier)
        return order[(order.index(self) - 1) % len(order)]

    def __str__(self) -> str:
        return self.value


class UpdateOptions(BaseModel):
    """Best available upgrade for each tier; ``None`` where there is none."""

    major: Version | None = None
    minor: Version | None = None
    patch: Version | None = None
    pre_release: Version | None = None

    def get(self, tier: Tier) -> Version | None:
        return {
            Tier.MAJOR: self.major,
            Tier.MINOR: self.minor,
            Tier.PATCH: self.patch,
            Tier.PRE_RELEASE: self.pre_release,
        }[tier]

    def is_empty(self) -> bool:
        return not self.available_tiers()

    def available_tiers(self) -> list[Tier]:
        return [tier for tier in Tier if self.get(tier) is not None]

    def default_tier(self) -> Tier:
        """The largest stable upgrade, or the pre-release when nothing else exists."""
        for tier in (Tier.MAJOR, Tier.MINOR, Tier.PATCH):
            if self.get(tier) is not None:
                return tier
        return Tier.PRE_RELEASE


def compute_update_options(
    current: Version, available: Iterable[Version]
) -> UpdateOptions | None:
    """Find the newest candidate in each tier above ``current``.

    Candidates are visited in ascending order and each one lands in the
    first tier it qualifies for (major, then minor, then patch, then
    pre-release), so later candidates overwrite earlier ones and every tier
    ends up holding its highest candidate. A pre-release is only kept when
    it is newer than every stable candidate found.

    A non-semantic ``current`` is compared as ``0.0.0``.

    Returns:
        The populated options, or None if there is nothing newer.
    """
    floor = current if isinstance(current, SemVer) else ZERO
    candidates = sorted(
        v for v in available if isinstance(v, SemVer) and v > floor
    )

    options = UpdateOptions()
    for v in candidates:
        if v.major > floor.major and not v.is_pre_release:
            options.major = v
        elif v.minor > floor.minor and not v.is_pre_release:
            options.minor = v
        elif v.patch > floor.patch and not v.is_pre_release:
            options.patch = v
        elif v.is_pre_release:
            options.pre_release = v

    if options.pre_release is not None:
        stable = [options.major, options.minor, options.patch]
        if any(v is not None and options.pre_release <= v for v in stable):
            options.pre_release = None

    if options.is_empty():
        return None
    return options
