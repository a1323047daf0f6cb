"""
Feature history and version compatibility for meta-client and meta-server.

The registry tracks, for every Feature, when the server started and stopped
providing it and when the client started and stopped requiring it. Both
histories are half-open spans `[since, until)` and are independent of each
other. The compatibility calculator reduces them to the two thresholds
enforced during the handshake.

Registries are built once with a SpecBuilder and are immutable afterwards:

    builder = SpecBuilder()
    builder.server_add(Feature.KV_READ_V1, Version(1, 2, 163))
    builder.client_add(Feature.KV_READ_V1, Version(1, 2, 176))
    spec = builder.build(Version(1, 2, 800))

Spec.load() builds the shipped registry for this release.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from meta_version.errors.spec import (
    DuplicateFeatureEditError,
    InvalidSpanError,
    MissingFeatureError,
    UnprovidedFeatureError,
)

from .calculator import (
    CompatibilityBound,
    min_compatible_client_version,
    min_compatible_server_version,
)
from .feature import Feature
from .feature_span import FeatureSpan
from .version import Version


class Side(str, Enum):
    SERVER = "server"
    CLIENT = "client"


class Edit(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class SpecBuilder:
    """
    Records feature additions and removals, then builds a Spec.

    Each feature accepts at most one of each edit per side:

    - server_add: the server provides the feature from this version.
    - server_remove: the server stops providing it at this version.
    - client_add: the client requires the feature from this version.
    - client_remove: the client stops requiring it at this version.

    Sides a feature has no edits for stay inert: the server always
    provides it and the client never requires it.
    """

    def __init__(self) -> None:
        self._edits: dict[tuple[Feature, Side], dict[Edit, Version]] = {}

    def server_add(self, feature: Feature, version: Version) -> SpecBuilder:
        return self._record(feature, Side.SERVER, Edit.ADD, version)

    def server_remove(self, feature: Feature, version: Version) -> SpecBuilder:
        return self._record(feature, Side.SERVER, Edit.REMOVE, version)

    def client_add(self, feature: Feature, version: Version) -> SpecBuilder:
        return self._record(feature, Side.CLIENT, Edit.ADD, version)

    def client_remove(self, feature: Feature, version: Version) -> SpecBuilder:
        return self._record(feature, Side.CLIENT, Edit.REMOVE, version)

    def _record(
        self,
        feature: Feature,
        side: Side,
        edit: Edit,
        version: Version,
    ) -> SpecBuilder:
        edits = self._edits.setdefault((feature, side), {})

        if edit in edits:
            raise DuplicateFeatureEditError(
                feature.value,
                f"{side.value}_{edit.value}",
            )

        edits[edit] = version

        # Fail at whichever edit completes an invalid span. build() catches
        # removals that never get an addition.
        if Edit.ADD in edits and Edit.REMOVE in edits:
            self._check_removal(feature, side, edits[Edit.ADD], edits[Edit.REMOVE])

        return self

    def _check_removal(
        self,
        feature: Feature,
        side: Side,
        since: Version,
        until: Version,
    ) -> None:
        if until <= since:
            raise InvalidSpanError(
                feature.value,
                side.value,
                str(since),
                str(until),
            )

    def _span(self, feature: Feature, side: Side) -> FeatureSpan:
        edits = self._edits.get((feature, side), {})

        default_since = Version.min() if side == Side.SERVER else Version.max()
        since = edits.get(Edit.ADD, default_since)
        until = edits.get(Edit.REMOVE, Version.max())

        if Edit.REMOVE in edits:
            self._check_removal(feature, side, since, until)

        return FeatureSpan(feature, since, until)

    def build(
        self,
        version: Version,
        require_complete: bool = False,
    ) -> Spec:
        """
        Validate the recorded history and freeze it into a Spec.

        Args:
            version: The version the Spec is evaluated at.
            require_complete: Require an explicit addition on both sides
                for every Feature.

        Raises:
            InvalidSpanError: A removal does not come after its addition.
            MissingFeatureError: `require_complete` is set and a feature
                has no history on one side.
            UnprovidedFeatureError: The client requires a feature during
                versions no server provides it.
        """
        server_features: dict[Feature, FeatureSpan] = {}
        client_features: dict[Feature, FeatureSpan] = {}

        for feature in Feature.all():
            if require_complete:
                for side in Side:
                    if Edit.ADD not in self._edits.get((feature, side), {}):
                        raise MissingFeatureError(feature.value, side.value)

            server_span = self._span(feature, Side.SERVER)
            client_span = self._span(feature, Side.CLIENT)

            required = client_span.since < client_span.until
            if required and not client_span.overlaps(server_span):
                raise UnprovidedFeatureError(
                    feature.value,
                    str(client_span),
                    str(server_span),
                )

            server_features[feature] = server_span
            client_features[feature] = client_span

        return Spec(
            version,
            server_features,
            client_features,
        )


class Spec:
    """
    A build version together with the full feature history.

    Iteration over features always follows Feature declaration order, which
    is also the order ties are broken in when several features bind a
    threshold at the same version.
    """

    __slots__ = (
        "_version",
        "_server_features",
        "_client_features",
    )

    def __init__(
        self,
        version: Version,
        server_features: dict[Feature, FeatureSpan],
        client_features: dict[Feature, FeatureSpan],
    ) -> None:
        self._version = version
        self._server_features = MappingProxyType(dict(server_features))
        self._client_features = MappingProxyType(dict(client_features))

    @classmethod
    def load(cls, version: Version | None = None) -> Spec:
        """
        Build the shipped registry.

        Args:
            version: Evaluation point. Defaults to this build's version.
        """
        from .constants import BUILD_VERSION
        from .history import record_history

        if version is None:
            version = BUILD_VERSION

        builder = SpecBuilder()
        record_history(builder)

        return builder.build(version, require_complete=True)

    @property
    def version(self) -> Version:
        return self._version

    @property
    def server_features(self) -> Mapping[Feature, FeatureSpan]:
        return self._server_features

    @property
    def client_features(self) -> Mapping[Feature, FeatureSpan]:
        return self._client_features

    def features(self) -> Iterator[tuple[Feature, FeatureSpan, FeatureSpan]]:
        """Yield `(feature, server_span, client_span)` in declaration order."""
        for feature in Feature.all():
            yield (
                feature,
                self._server_features[feature],
                self._client_features[feature],
            )

    def server_span(self, feature: Feature) -> FeatureSpan:
        return self._server_features[feature]

    def client_span(self, feature: Feature) -> FeatureSpan:
        return self._client_features[feature]

    def at(self, version: Version) -> Spec:
        """The same history evaluated at another version."""
        return Spec(
            version,
            dict(self._server_features),
            dict(self._client_features),
        )

    def min_compatible_server_version(self) -> CompatibilityBound:
        """Lowest server version able to serve a client at `self.version`."""
        return min_compatible_server_version(self, self._version)

    def min_compatible_client_version(self) -> CompatibilityBound:
        """Lowest client version able to connect to a server at `self.version`."""
        return min_compatible_client_version(self, self._version)
