"""Bearer credential lookup."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .config import RotatorConfig
from .errors import MissingCredential


def get_bearer_token(
    config: RotatorConfig, environ: Optional[Mapping[str, str]] = None
) -> str:
    """Return the management API token from the environment.

    The secret is read on every call so a rotated token is picked up without
    a restart.
    """
    env = os.environ if environ is None else environ
    token = env.get(config.api.token_env, "")
    if not token:
        raise MissingCredential(
            f"Secret {config.api.token_env} is not set for the management API"
        )
    return token
