"""tvrotate: Scheduled rotation of token validation credentials."""

from .config import ApiConfig, RotatorConfig, load_config
from .contracts import CredentialEnvelope
from .dispatch import CONTENT_TYPE, RequestDispatcher
from .errors import (
    MalformedSource,
    ManagementAPIFailure,
    MissingCredential,
    RotatorError,
    SourceUnreachable,
)
from .fetcher import CredentialFetcher
from .tokens import get_bearer_token
from .updater import CredentialUpdater

__version__ = "0.1.0"
__all__ = [
    "ApiConfig",
    "CONTENT_TYPE",
    "CredentialEnvelope",
    "CredentialFetcher",
    "CredentialUpdater",
    "MalformedSource",
    "ManagementAPIFailure",
    "MissingCredential",
    "RequestDispatcher",
    "RotatorConfig",
    "RotatorError",
    "SourceUnreachable",
    "get_bearer_token",
    "load_config",
]
