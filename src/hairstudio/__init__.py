"""Hair Studio - AI hairstyle previews from a selfie."""

__version__ = "0.1.0"

from hairstudio.core.config import HairStudioConfig, config

__all__ = [
    "HairStudioConfig",
    "config",
]
