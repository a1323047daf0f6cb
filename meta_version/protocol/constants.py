"""
Published compatibility thresholds for this build.

MIN_CLIENT_VERSION and MIN_SERVER_VERSION are what the handshake enforces.
They are written out by hand rather than computed at import time; the
calculator exists to check them, and verify_published_thresholds() (run by
the test suite) fails while they disagree with it.

When the feature history changes:

- raise MIN_CLIENT_VERSION when the server removes a feature,
- raise MIN_SERVER_VERSION when the client requires a new one,

then run the tests.
"""

from meta_version.errors.spec import ThresholdDriftError

from .feature import Feature
from .version import Version


VERSION_STR = "260205.0.0"

BUILD_VERSION = Version.parse(VERSION_STR)

# Minimum meta-client version a server of this build accepts.
MIN_CLIENT_VERSION = Version(1, 2, 676)
MIN_CLIENT_VERSION_WITNESS: Feature | None = Feature.TRANSACTION_REPLY_ERROR

# Minimum meta-server version a client of this build accepts.
MIN_SERVER_VERSION = Version(1, 2, 770)
MIN_SERVER_VERSION_WITNESS: Feature | None = Feature.EXPIRE_IN_MILLIS


def verify_published_thresholds(spec=None) -> None:
    """
    Check the published thresholds against the calculator.

    Args:
        spec: Registry to check against. Defaults to Spec.load().

    Raises:
        ThresholdDriftError: A published value no longer matches.
    """
    from .spec import Spec

    if spec is None:
        spec = Spec.load()

    published = (
        (
            "MIN_CLIENT_VERSION",
            MIN_CLIENT_VERSION,
            MIN_CLIENT_VERSION_WITNESS,
            spec.min_compatible_client_version(),
        ),
        (
            "MIN_SERVER_VERSION",
            MIN_SERVER_VERSION,
            MIN_SERVER_VERSION_WITNESS,
            spec.min_compatible_server_version(),
        ),
    )

    for name, version, witness, computed in published:
        if version != computed.version:
            raise ThresholdDriftError(
                name,
                str(version),
                str(computed.version),
            )

        if witness != computed.witness:
            raise ThresholdDriftError(
                f"{name}_WITNESS",
                str(witness),
                str(computed.witness),
            )
