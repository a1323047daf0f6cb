from meta_version.errors.handshake import HandshakeStateError
from meta_version.protocol.feature import Feature
from meta_version.protocol.version import Version

from .state import HandshakeRole, HandshakeState


class Handshake:
    """
    State shared by both ends of the handshake.

    Each instance validates exactly one connection. Steps must run in
    order and only once; anything else raises HandshakeStateError. Once
    REJECTED, an instance stays rejected: reconnecting means starting a
    new handshake on a new connection.
    """

    role: HandshakeRole

    def __init__(
        self,
        local_version: Version,
        required_version: Version,
        witness: Feature | None = None,
    ) -> None:
        self._local_version = local_version
        self._required_version = required_version
        self._witness = witness
        self._state = HandshakeState.START
        self._peer_version: Version | None = None

    @property
    def state(self) -> HandshakeState:
        return self._state

    @property
    def local_version(self) -> Version:
        return self._local_version

    @property
    def required_version(self) -> Version:
        """The minimum version this end accepts from its peer."""
        return self._required_version

    @property
    def witness(self) -> Feature | None:
        return self._witness

    @property
    def peer_version(self) -> Version | None:
        """The version the peer declared, once received."""
        return self._peer_version

    @property
    def validated(self) -> bool:
        return self._state == HandshakeState.VALIDATED

    def abandon(self) -> None:
        """
        Reject the handshake because its connection is being torn down.

        Used when the transport fails, times out or is cancelled. This also
        applies after this end validated its peer but before the exchange
        finished, for example when the server's response cannot be sent.
        """
        self._state = HandshakeState.REJECTED

    def _expect(self, state: HandshakeState, step: str) -> None:
        if self._state != state:
            raise HandshakeStateError(
                f"Cannot {step} in state {self._state.value} "
                f"({self.role.value} handshake expects {state.value})"
            )

    def _transition(self, state: HandshakeState) -> None:
        self._state = state
