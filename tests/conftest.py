"""Shared fixtures for playlist codec tests."""

import io
import json
import zipfile
from collections.abc import Callable
from typing import Any

import pytest

PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A]) + b"\x00\x00\x00\rIHDR fake png"
JPEG_BYTES = bytes([0xFF, 0xD8, 0xFF, 0xE0]) + b"\x00\x10JFIF fake jpeg"
ZERO_HASH = "0" * 40


@pytest.fixture
def png_bytes() -> bytes:
    """Bytes starting with the PNG signature."""
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Bytes starting with the JPEG signature."""
    return JPEG_BYTES


@pytest.fixture
def zero_hash() -> str:
    return ZERO_HASH


def _make_archive(manifest: Any = None, files: dict[str, bytes] | None = None) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        if manifest is not None:
            text = manifest if isinstance(manifest, (str, bytes)) else json.dumps(manifest)
            zf.writestr("playlist.json", text)
        for name, data in (files or {}).items():
            zf.writestr(name, data)
    return buffer.getvalue()


def _read_archive(data: bytes) -> dict[str, bytes]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    """Build zip bytes from a manifest (dict or raw text) and extra files."""
    return _make_archive


@pytest.fixture
def read_archive() -> Callable[[bytes], dict[str, bytes]]:
    """Read every entry of zip bytes into a name -> bytes dict."""
    return _read_archive
