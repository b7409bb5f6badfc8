"""
services/import_service.py
--------------------------
Merges expenses fetched from a remote JSON endpoint into the local table.

Workflow:
    1. GET the endpoint; expect a JSON array of {title, amount, category?}.
    2. Validate the whole payload before touching the database.
    3. Take one snapshot of the table and skip candidates whose
       (title, amount) already exists, including candidates repeated
       earlier in the same batch.
    4. Insert the rest inside a single transaction.

Failures never escape as exceptions; they come back as
ImportResult(success=False).
"""

import asyncio
import math
from typing import Optional

import requests

from config import IMPORT_API_URL, IMPORT_TIMEOUT_SECONDS
from db.connection import DatabaseError
from models.import_result import ImportResult
from repositories.expense_repo import ExpenseRepository
from utils.errors import ImportFailure, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class ImportService:
    """
    Args:
        repo: Repository the candidates are merged into.
        default_url: Endpoint used when import_from_api() is called without one.
        timeout: Seconds for the HTTP request, None to wait indefinitely.
    """

    def __init__(self, repo: ExpenseRepository, default_url: str = IMPORT_API_URL,
                 timeout: Optional[float] = IMPORT_TIMEOUT_SECONDS):
        self.repo = repo
        self.default_url = default_url
        self.timeout = timeout

    # ── FETCH ─────────────────────────────────────────────

    def fetch_candidates(self, url: str) -> list[dict]:
        """
        Download and validate the candidate list.

        Returns:
            List of dicts with 'title', 'amount' and 'category' (None if absent).

        Raises:
            ImportFailure: On transport errors, non-2xx responses or a
                payload that is not a list of well-formed records.
        """
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImportFailure(f"Request to {url} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ImportFailure(f"Response from {url} is not valid JSON") from e

        return self._parse_payload(payload)

    @staticmethod
    def _parse_payload(payload) -> list[dict]:
        if not isinstance(payload, list):
            raise ImportFailure("Expected a JSON array of expenses")

        candidates = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                raise ImportFailure(f"Item {index} is not an object")
            title = item.get("title")
            amount = item.get("amount")
            category = item.get("category")
            if not isinstance(title, str):
                raise ImportFailure(f"Item {index} has no string 'title'")
            if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                raise ImportFailure(f"Item {index} has no numeric 'amount'")
            try:
                finite = math.isfinite(amount)
            except OverflowError:
                finite = False
            if not finite:
                raise ImportFailure(f"Item {index} has an out-of-range 'amount'")
            if category is not None and not isinstance(category, str):
                raise ImportFailure(f"Item {index} has a non-string 'category'")
            candidates.append({"title": title, "amount": amount, "category": category or None})
        return candidates

    # ── MERGE ─────────────────────────────────────────────

    def merge(self, candidates: list[dict]) -> ImportResult:
        """
        Insert every candidate whose (title, amount) is not already stored.

        Titles compare exactly (case-sensitive, untrimmed), amounts compare
        numerically. The batch is all-or-nothing: if any insert fails the
        whole merge is rolled back.
        """
        imported = 0
        skipped = 0
        try:
            with self.repo.db.transaction():
                seen = {(e.title, float(e.amount)) for e in self.repo.list_all()}
                for item in candidates:
                    key = (item["title"], float(item["amount"]))
                    if key in seen:
                        skipped += 1
                        continue
                    self.repo.add(item["title"], item["amount"], item.get("category"), paid=1)
                    seen.add(key)
                    imported += 1
        except ValidationError as e:
            logger.error(f"Import rolled back, invalid candidate: {e}")
            return ImportResult(success=False, error=str(e))
        except DatabaseError as e:
            logger.error(f"Import rolled back, database error: {e}")
            return ImportResult(success=False, error=str(e))

        logger.info(f"Import finished: {imported} imported, {skipped} duplicates skipped")
        return ImportResult(success=True, imported=imported, skipped=skipped)

    # ── ENTRY POINTS ──────────────────────────────────────

    def import_from_api(self, url: Optional[str] = None) -> ImportResult:
        """Fetch from `url` (or the configured endpoint) and merge."""
        target = url or self.default_url
        if not target:
            return ImportResult(success=False, error="No import URL configured")
        try:
            candidates = self.fetch_candidates(target)
        except ImportFailure as e:
            logger.error(f"Import API error: {e}")
            return ImportResult(success=False, error=str(e))
        return self.merge(candidates)

    async def import_from_api_async(self, url: Optional[str] = None) -> ImportResult:
        """
        Same as import_from_api(), but the blocking HTTP call runs on a
        worker thread so the event loop keeps serving other commands.
        The merge itself runs on the caller's thread.
        """
        target = url or self.default_url
        if not target:
            return ImportResult(success=False, error="No import URL configured")
        try:
            candidates = await asyncio.to_thread(self.fetch_candidates, target)
        except ImportFailure as e:
            logger.error(f"Import API error: {e}")
            return ImportResult(success=False, error=str(e))
        return self.merge(candidates)
