from __future__ import annotations

import json
from typing import Callable, List

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from tvrotate.config import RotatorConfig

SOURCE_URL = "https://idp.example.com/.well-known/jwks.json"
CREDENTIALS_URL = (
    "https://api.cloudflare.com/client/v4/zones/zone123"
    "/api_gateway/token_validation/cfg-456/credentials"
)


def generate_jwk(kid: str) -> dict:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    jwk_dict = json.loads(jwt.algorithms.RSAAlgorithm.to_jwk(key.public_key()))
    jwk_dict["kid"] = kid
    jwk_dict["use"] = "sig"
    jwk_dict["alg"] = "RS256"
    return jwk_dict


@pytest.fixture(scope="session")
def jwks() -> dict:
    return {"keys": [generate_jwk("key-1"), generate_jwk("key-2")]}


@pytest.fixture
def config() -> RotatorConfig:
    return RotatorConfig(
        zone_id="zone123",
        token_config_id="cfg-456",
        source_url=SOURCE_URL,
    )


def _copy(response: httpx.Response) -> httpx.Response:
    return httpx.Response(
        response.status_code, headers=response.headers, content=response.content
    )


class Upstream:
    """Records requests and serves canned source/management API responses."""

    def __init__(
        self,
        source: httpx.Response,
        api: httpx.Response | None = None,
    ) -> None:
        self.source = source
        self.api = api or httpx.Response(200, text='{"success":true}')
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and str(request.url) == SOURCE_URL:
            return _copy(self.source)
        if request.method == "PUT" and str(request.url) == CREDENTIALS_URL:
            return _copy(self.api)
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self), follow_redirects=True
        )


@pytest.fixture
def make_upstream() -> Callable[..., Upstream]:
    return Upstream


@pytest.fixture
def source_url() -> str:
    return SOURCE_URL


@pytest.fixture
def credentials_url() -> str:
    return CREDENTIALS_URL
