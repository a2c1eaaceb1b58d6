"""Exception hierarchy for Hair Studio.

Every error the service reports to a caller is one of these.  The FastAPI
layer maps each class to exactly one HTTP status:

==================  ======  ===========================================
Exception           Status  Body
==================  ======  ===========================================
``AccessDenied``    401     ``{"success": false, "error": <fixed>}``
``ValidationError`` 400     ``{"error": <message>}``
``ProviderError``   500     ``{"error": <underlying message>}``
==================  ======  ===========================================

Nothing is retried locally.
"""


class HairStudioError(Exception):
    """Base class for all Hair Studio errors.

    The message is intended to be displayed directly to the user.
    """

    pass


class AccessDenied(HairStudioError):
    """The submitted access key was missing or wrong.

    The message is fixed so callers learn nothing about why access failed.
    """

    def __init__(self) -> None:
        super().__init__("Invalid access key")


class ValidationError(HairStudioError):
    """A generation request is missing required input or has malformed uploads."""

    pass


class ProviderError(HairStudioError):
    """The image-generation provider call failed (network, quota, bad response)."""

    pass
