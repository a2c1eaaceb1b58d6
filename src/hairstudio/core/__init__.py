"""Core functionality for hairstyle generation.

This module provides the core components for Hair Studio:

- **HairStudioConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **verify_access**: Shared-secret access gate
- **GenerationOrchestrator**: Prompt compilation, provider call and result extraction
- **ImageProviderBase**: Interface for image-generation providers

Architecture Overview
---------------------
The core module follows a layered architecture:

1. **Configuration Layer** (config.py, logging_setup.py):
   - Environment-based configuration using Pydantic Settings
   - Settings prefixed with HAIRSTUDIO_ (legacy PORT / ACCESS_KEY /
     GEMINI_API_KEY still accepted)
   - Application logger with stdout and/or file sinks

2. **Domain Layer** (models.py, access.py, prompt_builder.py, orchestrator.py):
   - Request-scoped data models
   - Access gate
   - Preset and reference prompt templates
   - Generation orchestration and response extraction

3. **Provider Layer** (provider.py, adapters/):
   - Unified interface for remote image-generation services
   - Google Gemini implementation

Usage Example
-------------
    >>> from hairstudio.core import GenerationOrchestrator, GenerationRequest
    >>> from hairstudio.core.adapters import GeminiImageProvider
    >>> orchestrator = GenerationOrchestrator(GeminiImageProvider(api_key="..."))
    >>> result = orchestrator.generate(request)
"""

from .access import verify_access
from .config import HairStudioConfig, config
from .errors import AccessDenied, HairStudioError, ProviderError, ValidationError
from .models import GenerationRequest, GenerationResult, ImageInput, ProviderPart
from .orchestrator import GenerationOrchestrator, extract_result
from .provider import ImageProviderBase

__all__ = [
    "AccessDenied",
    "GenerationOrchestrator",
    "GenerationRequest",
    "GenerationResult",
    "HairStudioConfig",
    "HairStudioError",
    "ImageInput",
    "ImageProviderBase",
    "ProviderError",
    "ProviderPart",
    "ValidationError",
    "config",
    "extract_result",
    "verify_access",
]
