from .models import Entry, LogLevel


class HandshakeDebug(Entry, kw_only=True):
    role: str
    peer: str
    local_version: str
    level: LogLevel = LogLevel.DEBUG

class HandshakeInfo(Entry, kw_only=True):
    role: str
    peer: str
    local_version: str
    peer_version: str
    level: LogLevel = LogLevel.INFO

class HandshakeWarning(Entry, kw_only=True):
    role: str
    peer: str
    local_version: str
    peer_version: str | None = None
    required_version: str
    witness: str | None = None
    level: LogLevel = LogLevel.WARN

class HandshakeFailure(Entry, kw_only=True):
    role: str
    peer: str
    local_version: str
    error: str
    level: LogLevel = LogLevel.ERROR

