"""Shared-secret access gate."""

from __future__ import annotations

import hmac


def verify_access(submitted_key: object, configured_key: str | None) -> bool:
    """Check a submitted access key against the configured secret.

    Access is granted only when a secret is configured and the submitted
    value is exactly equal to it (case-sensitive, no trimming).  With no
    secret configured the gate fails closed.

    Args:
        submitted_key: Value the client sent.  Anything other than a string
            is denied.
        configured_key: The configured secret, or ``None``.

    Returns:
        ``True`` if access is granted, ``False`` otherwise.
    """
    if not configured_key:
        return False
    if not isinstance(submitted_key, str):
        return False

    return hmac.compare_digest(
        submitted_key.encode("utf-8", "surrogatepass"),
        configured_key.encode("utf-8", "surrogatepass"),
    )
