"""Tests for sbt_bump.update_options."""

from __future__ import annotations

from sbt_bump.update_options import Tier, UpdateOptions, compute_update_options
from sbt_bump.versions import parse_version


def options_for(current: str, available: list[str]) -> UpdateOptions | None:
    return compute_update_options(
        parse_version(current), [parse_version(v) for v in available]
    )


def v(text: str):
    return parse_version(text)


class TestComputeUpdateOptions:
    def test_major_and_patch(self) -> None:
        options = options_for("1.2.3", ["1.2.1", "1.2.3", "1.2.4", "2.0.0"])
        assert options == UpdateOptions(major=v("2.0.0"), patch=v("1.2.4"))

    def test_newer_pre_release_is_kept(self) -> None:
        options = options_for(
            "1.2.3", ["1.2.1", "1.2.3", "3.1.0-RC1", "3.0.0", "2.0.0"]
        )
        assert options is not None
        assert options.major == v("3.0.0")
        assert options.minor is None
        assert options.patch is None
        assert options.pre_release == v("3.1.0-RC1")

    def test_older_pre_release_is_dropped(self) -> None:
        options = options_for("1.2.3", ["3.0.0", "2.9.0-RC1"])
        assert options == UpdateOptions(major=v("3.0.0"))

    def test_no_updates(self) -> None:
        available = [
            "1.0.0",
            "1.1.0",
            "1.2.0",
            "1.2.3",
            "1.2.3-RC1",
            "1.2.3-M1",
            "2.0.0",
            "2.1.0",
            "2.2.0",
            "2.2.3",
            "2.2.3-RC1",
            "2.2.3-M1",
        ]
        assert options_for("2.2.3", available) is None

    def test_mixed_versions(self) -> None:
        available = [
            "1.0.0",
            "1.2.3-RC1",
            "2.0.0",
            "2.1.0",
            "2.1.1",
            "2.1.1-RC1",
            "2.1.1-M1",
            "2.2.0",
            "2.2.3",
            "2.2.3-RC1",
            "2.2.3-M1",
            "3.0.0",
            "3.0.0-RC1",
            "3.1.0-M1",
        ]
        options = options_for("2.1.0", available)
        assert options == UpdateOptions(
            major=v("3.0.0"),
            minor=v("2.2.3"),
            patch=v("2.1.1"),
            pre_release=v("3.1.0-M1"),
        )

    def test_empty_available(self) -> None:
        assert options_for("1.0.0", []) is None

    def test_date_style_versions(self) -> None:
        """Zero-padded components are numbers, so this is a minor bump."""
        options = options_for("2024.01.15", ["2024.02.01", "2024.2.1"])
        assert options is not None
        assert options.major is None
        assert options.minor == v("2024.2.1")
        assert str(options.minor) == "2024.2.1"

    def test_non_semver_candidates_ignored(self) -> None:
        assert options_for("1.0.0", ["nightly", "1.0.0.1"]) is None

    def test_non_semver_current_uses_zero_floor(self) -> None:
        options = options_for("some-tag", ["0.0.3", "0.4.0", "1.5.0"])
        assert options == UpdateOptions(
            major=v("1.5.0"), minor=v("0.4.0"), patch=v("0.0.3")
        )

    def test_candidate_only_fills_first_matching_tier(self) -> None:
        """2.1.1 has a higher major, so it never lands in minor or patch."""
        options = options_for("1.0.0", ["2.1.1"])
        assert options == UpdateOptions(major=v("2.1.1"))

    def test_pre_release_only(self) -> None:
        options = options_for("1.0.0", ["1.0.1-RC1", "1.0.1-RC2"])
        assert options == UpdateOptions(pre_release=v("1.0.1-RC2"))


class TestUpdateOptionsHelpers:
    def test_available_tiers(self) -> None:
        options = UpdateOptions(major=v("2.0.0"), patch=v("1.0.1"))
        assert options.available_tiers() == [Tier.MAJOR, Tier.PATCH]

    def test_default_tier_prefers_stable(self) -> None:
        assert UpdateOptions(minor=v("1.1.0"), pre_release=v("2.0.0-M1")).default_tier() is Tier.MINOR
        assert UpdateOptions(pre_release=v("2.0.0-M1")).default_tier() is Tier.PRE_RELEASE

    def test_get(self) -> None:
        options = UpdateOptions(minor=v("1.1.0"))
        assert options.get(Tier.MINOR) == v("1.1.0")
        assert options.get(Tier.MAJOR) is None


class TestTier:
    def test_next_cycles(self) -> None:
        assert Tier.MAJOR.next() is Tier.MINOR
        assert Tier.PRE_RELEASE.next() is Tier.MAJOR

    def test_prev_cycles(self) -> None:
        assert Tier.MAJOR.prev() is Tier.PRE_RELEASE
        assert Tier.PATCH.prev() is Tier.MINOR
