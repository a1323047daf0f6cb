from .spec import MetaVersionError as MetaVersionError
from .spec import SpecError as SpecError
from .spec import InvalidSpanError as InvalidSpanError
from .spec import DuplicateFeatureEditError as DuplicateFeatureEditError
from .spec import MissingFeatureError as MissingFeatureError
from .spec import UnprovidedFeatureError as UnprovidedFeatureError
from .spec import ThresholdDriftError as ThresholdDriftError
from .handshake import IncompatibleSide as IncompatibleSide
from .handshake import HandshakeError as HandshakeError
from .handshake import VersionIncompatibleError as VersionIncompatibleError
from .handshake import HandshakeStateError as HandshakeStateError
from .handshake import HandshakeTimeoutError as HandshakeTimeoutError
from .handshake import HandshakeMessageError as HandshakeMessageError
