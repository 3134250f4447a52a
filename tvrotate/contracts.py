"""Credential envelope exchanged between the source and the management API."""

from __future__ import annotations

import json
import re
from typing import Any, List

from pydantic import BaseModel

from .errors import MalformedSource

_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")


class CredentialEnvelope(BaseModel):
    """The ``{"keys": [...]}`` document pushed to a token configuration.

    Individual keys are carried through without validation.
    """

    keys: List[Any]

    @classmethod
    def from_source(cls, document: Any) -> "CredentialEnvelope":
        """Build an envelope from a parsed key set document."""
        if not isinstance(document, dict) or "keys" not in document:
            raise MalformedSource("Source document has no 'keys' field")
        keys = document["keys"]
        if not isinstance(keys, list):
            raise MalformedSource(
                f"Source 'keys' field is {type(keys).__name__}, expected a list"
            )
        return cls(keys=keys)

    def to_json(self) -> str:
        """Serialize as compact JSON, preserving key order.

        Non-ASCII text is kept as-is; unpaired surrogates are written as
        ``\\uXXXX`` escapes so the result always encodes as UTF-8.
        """
        text = json.dumps(
            {"keys": self.keys}, separators=(",", ":"), ensure_ascii=False
        )
        return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)
