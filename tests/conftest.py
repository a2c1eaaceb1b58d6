"""Shared pytest fixtures for Hair Studio tests."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Sequence
from io import BytesIO
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from hairstudio.api.main import create_app
from hairstudio.core.config import HairStudioConfig
from hairstudio.core.models import ImageInput, ProviderPart
from hairstudio.core.provider import ImageProviderBase

ACCESS_KEY = "abc"

# "img" base64-encoded; stands in for a generated image payload.
FAKE_IMAGE_B64 = "aW1n"


class FakeProvider(ImageProviderBase):
    """In-memory provider that records calls instead of hitting the network.

    Args:
        parts: Response parts to return.  Defaults to one image and one text part.
        error: Exception to raise from ``generate_content`` instead of returning.
    """

    name = "fake"
    description = "Test double"

    def __init__(
        self,
        parts: list[ProviderPart] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(model="fake-model")
        if parts is None:
            parts = [
                ProviderPart(mime_type="image/png", data=FAKE_IMAGE_B64),
                ProviderPart(text="Here is your new look."),
            ]
        self.parts = parts
        self.error = error
        self.calls: list[tuple[list[ImageInput], str]] = []

    def generate_content(
        self, images: Sequence[ImageInput], prompt: str
    ) -> list[ProviderPart]:
        self.calls.append((list(images), prompt))
        if self.error is not None:
            raise self.error
        return list(self.parts)

    @property
    def last_prompt(self) -> str:
        return self.calls[-1][1]

    @property
    def last_images(self) -> list[ImageInput]:
        return self.calls[-1][0]


def make_png(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
    """Return the bytes of a small solid-colour PNG."""
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def static_dir(temp_dir: Path) -> Path:
    """Create a minimal client bundle.

    Returns:
        Path to a directory holding ``index.html`` and ``app.js``
    """
    static_path = temp_dir / "static"
    static_path.mkdir()
    (static_path / "index.html").write_text(
        "<!doctype html><title>AI Hair Assistant</title>", encoding="utf-8"
    )
    (static_path / "app.js").write_text("console.log('hair');", encoding="utf-8")
    return static_path


@pytest.fixture
def test_config(temp_dir: Path, static_dir: Path) -> HairStudioConfig:
    """Create a test configuration with a known access key and no real sinks.

    Returns:
        HairStudioConfig instance for testing
    """
    return HairStudioConfig(
        _env_file=None,
        access_key=ACCESS_KEY,
        gemini_api_key="test-key",
        static_dir=static_dir,
        log_to_stdout=False,
        log_file=temp_dir / "logs" / "server.log",
    )


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider returning one image part and one text part."""
    return FakeProvider()


@pytest.fixture
def test_client(
    test_config: HairStudioConfig, fake_provider: FakeProvider
) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the fake provider.

    The client is used as a context manager so the application lifespan
    (logger and orchestrator setup) runs.
    """
    app = create_app(test_config, provider=fake_provider)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def png_bytes() -> bytes:
    """A valid PNG image."""
    return make_png()


@pytest.fixture
def base_image(png_bytes: bytes) -> ImageInput:
    """Base image input for orchestrator tests."""
    return ImageInput(data=png_bytes, mime_type="image/png")


@pytest.fixture
def reference_image() -> ImageInput:
    """Reference image input for orchestrator tests."""
    return ImageInput(data=make_png("blue"), mime_type="image/jpeg")


@pytest.fixture
def png_factory():
    """Factory for PNG bytes of a given colour and size."""
    return make_png
