"""Pydantic request and response models for the Hair Studio API.

These models define the JSON schema for the API endpoints.  FastAPI uses
them for serialisation and OpenAPI documentation generation.  The
generation endpoint takes multipart form data, so it has no request model.

Models
------
AccessRequest
    Payload for ``POST /api/verify-access``.
AccessResponse
    Success or failure body of ``POST /api/verify-access``.
GenerateResponse
    Success body of ``POST /api/generate-hairstyle``.
ErrorResponse
    Failure body of ``POST /api/generate-hairstyle``.
OptionsResponse
    Preset catalogue returned by ``GET /api/options``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AccessRequest(BaseModel):
    """Request body for the ``POST /api/verify-access`` endpoint.

    Attributes:
        key: The access key typed by the user.  A missing key is denied.
    """

    key: str | None = Field(
        default=None,
        description="Access key to check against the configured secret.",
    )


class AccessResponse(BaseModel):
    """Response body for the ``POST /api/verify-access`` endpoint."""

    success: bool = Field(..., description="True when access is granted.")
    error: str | None = Field(
        default=None,
        description="Fixed error message when access is denied.",
    )


class GenerateResponse(BaseModel):
    """Success body for the ``POST /api/generate-hairstyle`` endpoint.

    Attributes:
        success: Always ``True``.
        description: All text returned by the provider, concatenated.
        image: The first returned image as a ``data:`` URI, or ``None`` when
            the provider returned text only.
    """

    success: bool = Field(default=True)
    description: str = Field(
        default="",
        description="Text returned by the provider (fallback when no image).",
    )
    image: str | None = Field(
        default=None,
        description="Generated image as a data URI.",
    )


class ErrorResponse(BaseModel):
    """Failure body for the ``POST /api/generate-hairstyle`` endpoint."""

    error: str = Field(..., description="Human-readable error message.")


class OptionsResponse(BaseModel):
    """Preset catalogue for the client form."""

    modes: list[str] = Field(..., description="Supported generation modes.")
    styles: list[str] = Field(..., description="Suggested hairstyles.")
    colors: list[str] = Field(..., description="Suggested hair colours.")
