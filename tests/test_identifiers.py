"""Tests for artifact identifier minting."""

import re

import pytest

from aibooth.domain.errors import IdentifierError
from aibooth.services.identifiers import IdentifierGenerator, storage_key


def test_generate_returns_32_lowercase_hex_chars() -> None:
    artifact_id = IdentifierGenerator().generate()

    assert re.fullmatch(r"[0-9a-f]{32}", artifact_id)


def test_generate_never_collides_over_a_million_samples() -> None:
    generator = IdentifierGenerator()

    seen = {generator.generate() for _ in range(1_000_000)}

    assert len(seen) == 1_000_000


def test_generate_uses_injected_source() -> None:
    generator = IdentifierGenerator(random_bytes=lambda size: bytes(range(size)))

    assert generator.generate() == "000102030405060708090a0b0c0d0e0f"


def test_entropy_failure_raises_identifier_error() -> None:
    def broken_source(_size: int) -> bytes:
        raise OSError("no entropy")

    with pytest.raises(IdentifierError):
        IdentifierGenerator(random_bytes=broken_source).generate()


def test_short_read_raises_identifier_error() -> None:
    with pytest.raises(IdentifierError):
        IdentifierGenerator(random_bytes=lambda _size: b"\x00").generate()


def test_storage_key_uses_jpg_suffix() -> None:
    assert storage_key("abc123") == "abc123.jpg"
