"""
Exceptions raised while building or verifying the feature registry.

All of these are fatal: a process must not start with a registry that
raises any of them, and a build must not ship while ThresholdDriftError
is raised by its tests.
"""


class MetaVersionError(Exception):
    """Base class for every error raised by meta_version."""

    pass


class SpecError(MetaVersionError):
    """The feature registry is malformed."""

    pass


class InvalidSpanError(SpecError):
    """
    Raised when a feature span ends at or before it starts.

    A removal must come strictly after the matching addition, so
    `until <= since` is rejected when the registry is built rather than
    discovered later as a silently wrong threshold.
    """

    def __init__(self, feature: str, side: str, since: str, until: str) -> None:
        self.feature = feature
        self.side = side
        self.since = since
        self.until = until
        super().__init__(
            f"Invalid {side} span for feature {feature}: "
            f"until({until}) <= since({since})"
        )


class DuplicateFeatureEditError(SpecError):
    """
    Raised when the same edit is recorded twice for one feature.

    Two additions (or two removals) on the same side leave the feature
    history ambiguous.
    """

    def __init__(self, feature: str, edit: str) -> None:
        self.feature = feature
        self.edit = edit
        super().__init__(f"Duplicate {edit} for feature {feature}")


class MissingFeatureError(SpecError):
    """Raised when a complete registry lacks a history entry for a feature."""

    def __init__(self, feature: str, side: str) -> None:
        self.feature = feature
        self.side = side
        super().__init__(f"Missing {side} history for feature: {feature}")


class UnprovidedFeatureError(SpecError):
    """
    Raised when a client requires a feature no server version provides.

    The client span of every required feature must share at least one
    version with the server span of the same feature.
    """

    def __init__(self, feature: str, client_span: str, server_span: str) -> None:
        self.feature = feature
        self.client_span = client_span
        self.server_span = server_span
        super().__init__(
            f"Client requires feature {feature} during {client_span} "
            f"but no server provides it then: {server_span}"
        )


class ThresholdDriftError(MetaVersionError):
    """
    Raised when a published threshold disagrees with the computed one.

    This means the registry changed without the shipped constants being
    updated to match.
    """

    def __init__(self, name: str, published: str, computed: str) -> None:
        self.name = name
        self.published = published
        self.computed = computed
        super().__init__(
            f"{name} does not match computed value: published {published}, "
            f"computed {computed}. Update {name} in "
            f"meta_version/protocol/constants.py."
        )
