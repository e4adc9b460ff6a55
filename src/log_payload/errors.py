"""Exceptions raised by log_payload."""
from __future__ import annotations

__all__ = ["PayloadEncodeError"]


class PayloadEncodeError(ValueError):
    """A payload holds a value the JSON encoder cannot represent.

    Raised by `serialization.dumps`. The encoding pipeline itself never raises
    it; unknown values pass through the sanitizer untouched and only fail
    here, at serialization time.
    """
