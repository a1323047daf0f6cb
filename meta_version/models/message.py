from typing import Self

import msgspec
import orjson

from meta_version.errors.handshake import HandshakeMessageError


class Message(msgspec.Struct, kw_only=True):

    @classmethod
    def load(cls, data: bytes) -> Self:
        try:
            return msgspec.convert(
                orjson.loads(data),
                type=cls,
            )

        except (msgspec.ValidationError, ValueError, TypeError) as err:
            raise HandshakeMessageError(
                f"Could not decode {cls.__name__}: {err}"
            ) from err

    def dump(self) -> bytes:
        return orjson.dumps(
            msgspec.to_builtins(self)
        )
