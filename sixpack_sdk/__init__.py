"""
sixpack_sdk
───────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from sixpack_sdk.tier0_core.logging import get_logger
from sixpack_sdk.tier0_core.errors import (
    SixpackError,
    ValidationError,
    InvalidName,
    InvalidKpi,
    InsufficientAlternatives,
    UpstreamError,
    RequestTimeoutError,
    ConfigurationError,
)
from sixpack_sdk.tier0_core.config import ClientConfig, get_config
from sixpack_sdk.tier0_core.ids import new_client_id

from sixpack_sdk.tier1_runtime.validate import validate_name
from sixpack_sdk.tier1_runtime.params import (
    ExperimentRequest,
    build_parameters,
    build_query_string,
    request_uri,
)
from sixpack_sdk.tier1_runtime.outcome import (
    Outcome,
    Success,
    ServerFailure,
    TimedOut,
    GenericError,
)

from sixpack_sdk.tier2_reliability.dispatch import Dispatcher

from sixpack_sdk.tier3_platform.session import Session

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "SixpackError", "ValidationError", "InvalidName", "InvalidKpi",
    "InsufficientAlternatives", "UpstreamError", "RequestTimeoutError",
    "ConfigurationError",
    # config
    "ClientConfig", "get_config",
    # ids
    "new_client_id",
    # validate
    "validate_name",
    # params
    "ExperimentRequest", "build_parameters", "build_query_string", "request_uri",
    # outcome
    "Outcome", "Success", "ServerFailure", "TimedOut", "GenericError",
    # dispatch
    "Dispatcher",
    # session
    "Session",
]
