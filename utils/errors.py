"""
utils/errors.py
---------------
Domain exceptions shared by the repository and service layers.
"""


class ValidationError(ValueError):
    """Raised when an expense does not meet the write-time rules (title, amount)."""


class ImportFailure(Exception):
    """
    Raised inside the importer when the remote source cannot be read:
    transport errors, non-2xx responses, undecodable or malformed payloads.

    Never escapes ImportService; it is turned into a failed ImportResult.
    """
