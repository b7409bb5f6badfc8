"""
models/import_result.py
-----------------------
Outcome of one remote import run.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ImportResult:
    """
    Attributes:
        success: False if the fetch, the payload or the merge failed.
        imported: Rows actually inserted (0 on failure).
        skipped: Candidates skipped as duplicates (0 on failure).
        error: Human-readable reason when success is False.
    """
    success: bool
    imported: int = 0
    skipped: int = 0
    error: Optional[str] = None
