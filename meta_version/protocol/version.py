"""
Release versions for the meta-service protocol.

A Version is the unit every compatibility decision is made in: feature
spans, computed thresholds and the versions peers declare during the
handshake are all Versions.

Ordering is plain lexicographic ordering over (major, minor, patch), so the
two sentinels need no special casing:

- Version.min() (0.0.0) sorts below every real release.
- Version.max() sorts above every real release and marks "unbounded".
"""

from __future__ import annotations

import re
from dataclasses import dataclass


_U64_MAX = 2**64 - 1

_VERSION_PATTERN = re.compile(
    r"^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:[-+][0-9A-Za-z.\-+]*)?$"
)


@dataclass(slots=True, frozen=True, order=True)
class Version:
    """
    Three component release version.

    Attributes:
        major: Major version component.
        minor: Minor version component.
        patch: Patch version component.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for component in (self.major, self.minor, self.patch):
            if isinstance(component, bool) or not isinstance(component, int):
                raise ValueError(
                    f"Version components must be integers, got {component!r}"
                )

            if component < 0:
                raise ValueError(
                    f"Version components must be non-negative, got {component}"
                )

    @classmethod
    def min(cls) -> Version:
        """The lowest possible version, 0.0.0. Never a real release."""
        return cls(0, 0, 0)

    @classmethod
    def max(cls) -> Version:
        """
        A version greater than every real release.

        Used as the default `until` for spans that have not ended, and as
        the `since` of client features no released client requires yet.
        """
        return cls(_U64_MAX, _U64_MAX, _U64_MAX)

    @classmethod
    def parse(cls, version: str) -> Version:
        """
        Parse `major.minor.patch`, optionally prefixed with `v`.

        Pre-release and build suffixes (`-rc1`, `+build.5`) are accepted
        and discarded.

        Raises:
            ValueError: If the text is not a three component version.
        """
        matched = _VERSION_PATTERN.match(version.strip())
        if matched is None:
            raise ValueError(f"Invalid version string: {version!r}")

        return cls(
            int(matched.group("major")),
            int(matched.group("minor")),
            int(matched.group("patch")),
        )

    @classmethod
    def from_digit(cls, digit: int) -> Version:
        return cls(
            digit // 1_000_000,
            digit // 1_000 % 1_000,
            digit % 1_000,
        )

    def to_digit(self) -> int:
        """
        Pack the version into a single integer.

        Lossy once minor or patch reach 1000: the overflow carries into
        the next component.
        """
        return self.major * 1_000_000 + self.minor * 1_000 + self.patch

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_max(self) -> bool:
        return self == Version.max()

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __repr__(self) -> str:
        return f"Version({self.major}, {self.minor}, {self.patch})"
