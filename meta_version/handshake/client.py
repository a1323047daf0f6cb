from meta_version.errors.handshake import (
    HandshakeError,
    HandshakeMessageError,
    IncompatibleSide,
    VersionIncompatibleError,
)
from meta_version.models.handshake import HandshakeRequest, HandshakeResponse
from meta_version.protocol.constants import (
    BUILD_VERSION,
    MIN_SERVER_VERSION,
    MIN_SERVER_VERSION_WITNESS,
)
from meta_version.protocol.feature import Feature
from meta_version.protocol.version import Version

from .base import Handshake
from .state import HandshakeRole, HandshakeState


class ClientHandshake(Handshake):
    """
    The connecting end of the handshake.

    1. start() declares the client's version to the server.
    2. receive_response() checks the server's answer, either a rejection
       of this client or the server's version, which must be at least
       MIN_SERVER_VERSION.
    """

    role = HandshakeRole.CLIENT

    def __init__(
        self,
        local_version: Version = BUILD_VERSION,
        min_server_version: Version = MIN_SERVER_VERSION,
        witness: Feature | None = MIN_SERVER_VERSION_WITNESS,
    ) -> None:
        super().__init__(
            local_version,
            min_server_version,
            witness=witness,
        )

    def start(self) -> bytes:
        """Return the encoded HandshakeRequest to send to the server."""
        self._expect(HandshakeState.START, "send handshake request")
        self._transition(HandshakeState.AWAITING_PEER_VERSION)

        return HandshakeRequest(
            protocol_version=self._local_version,
        ).dump()

    def receive_response(self, data: bytes) -> Version:
        """
        Validate the server's HandshakeResponse.

        Returns:
            The server's declared version.

        Raises:
            VersionIncompatibleError: The server rejected this client
                (client too old) or the server is below
                MIN_SERVER_VERSION (server too old).
            HandshakeMessageError: The response could not be decoded.
        """
        self._expect(HandshakeState.AWAITING_PEER_VERSION, "receive handshake response")

        try:
            response = HandshakeResponse.load(data)
            return self._validate(response)

        except HandshakeError:
            self._transition(HandshakeState.REJECTED)
            raise

    def _validate(self, response: HandshakeResponse) -> Version:
        if not response.accepted:
            if response.required_version is None:
                raise HandshakeMessageError(
                    f"Server rejected handshake without a threshold: {response.error}"
                )

            if response.required_version <= self._local_version:
                raise HandshakeMessageError(
                    f"Server rejected handshake but requires {response.required_version}, "
                    f"which this client at {self._local_version} already meets"
                )

            raise VersionIncompatibleError(
                IncompatibleSide.CLIENT_TOO_OLD,
                self._local_version,
                response.required_version,
                witness=response.witness,
            )

        if response.protocol_version is None:
            raise HandshakeMessageError(
                "Server accepted handshake without declaring its version"
            )

        server_version = response.protocol_version
        self._peer_version = server_version

        if server_version < self._required_version:
            raise VersionIncompatibleError(
                IncompatibleSide.SERVER_TOO_OLD,
                server_version,
                self._required_version,
                witness=self._witness,
            )

        self._transition(HandshakeState.VALIDATED)

        return server_version
