"""
Error types shared by the console UI adapters.

Prompt failures surface as UIError. Output failures are never raised; they
are handed to the logging sink instead.
"""

from __future__ import annotations


class UIError(Exception):
    """
    Raised when a prompt cannot produce an answer.

    The message carries a short prefix naming the prompt that failed
    (e.g. "Asking for text: ..."), or "Stopped" for a declined confirmation.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UIAbort(BaseException):
    """
    Unrecoverable UI condition.

    Derives from BaseException so generic `except Exception` handlers in
    callers do not turn it into a fallback value.
    """
