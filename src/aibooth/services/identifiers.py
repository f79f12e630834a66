"""Artifact identifier minting."""

import secrets
from collections.abc import Callable
from dataclasses import dataclass

from aibooth.domain.errors import IdentifierError

ARTIFACT_ID_BYTES = 16


@dataclass
class IdentifierGenerator:
    """Mints 128-bit random identifiers rendered as lowercase hex."""

    random_bytes: Callable[[int], bytes] = secrets.token_bytes

    def generate(self) -> str:
        """Return a new 32-character artifact identifier."""
        try:
            raw = self.random_bytes(ARTIFACT_ID_BYTES)
        except (OSError, NotImplementedError) as exc:
            raise IdentifierError("Secure random source unavailable") from exc
        if len(raw) != ARTIFACT_ID_BYTES:
            raise IdentifierError(
                f"Random source returned {len(raw)} bytes, "
                f"expected {ARTIFACT_ID_BYTES}"
            )
        return raw.hex()


def storage_key(artifact_id: str) -> str:
    """Object storage key for an artifact."""
    return f"{artifact_id}.jpg"
