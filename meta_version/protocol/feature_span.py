from __future__ import annotations

from dataclasses import dataclass, field, replace

from .feature import Feature
from .version import Version


@dataclass(slots=True, frozen=True)
class FeatureSpan:
    """
    The lifetime `[since, until)` of a feature on one side of a connection.

    Attributes:
        feature: The feature this span describes.
        since: First version with the feature (inclusive).
        until: First version without the feature again (exclusive).
            Version.max() while the feature has not been removed.
    """

    feature: Feature
    since: Version
    until: Version = field(default_factory=Version.max)

    def with_until(self, until: Version) -> FeatureSpan:
        return replace(self, until=until)

    def is_active_at(self, version: Version) -> bool:
        """True when `since <= version < until`."""
        return self.since <= version < self.until

    def overlaps(self, other: FeatureSpan) -> bool:
        """True when both spans share at least one version."""
        return max(self.since, other.since) < min(self.until, other.until)

    def __str__(self) -> str:
        until = "inf" if self.until.is_max else str(self.until)
        since = "inf" if self.since.is_max else str(self.since)
        return f"{self.feature.value}[{since}, {until})"
