"""
Protocol versioning for meta-client and meta-server.

This module provides:
- Version, the unit every compatibility decision is made in
- Feature and FeatureSpan, the closed set of tracked capabilities
- Spec and SpecBuilder, the feature history registry
- The compatibility calculator and the published thresholds it verifies
"""

from .version import Version as Version
from .feature import Feature as Feature
from .feature_span import FeatureSpan as FeatureSpan
from .calculator import (
    CompatibilityBound as CompatibilityBound,
    min_compatible_client_version as min_compatible_client_version,
    min_compatible_server_version as min_compatible_server_version,
)
from .spec import (
    Spec as Spec,
    SpecBuilder as SpecBuilder,
)
from .constants import (
    VERSION_STR as VERSION_STR,
    BUILD_VERSION as BUILD_VERSION,
    MIN_CLIENT_VERSION as MIN_CLIENT_VERSION,
    MIN_CLIENT_VERSION_WITNESS as MIN_CLIENT_VERSION_WITNESS,
    MIN_SERVER_VERSION as MIN_SERVER_VERSION,
    MIN_SERVER_VERSION_WITNESS as MIN_SERVER_VERSION_WITNESS,
    verify_published_thresholds as verify_published_thresholds,
)
