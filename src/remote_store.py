"""Client for the spreadsheet-backed schedule script.

Loads are GET requests with an action token and come back as JSON. Saves are
POSTed and never read back: the deployed script does not return a response the
dashboard can rely on, so a sent save is reported with an unknown ack.
"""
import logging
from typing import Any, Optional

import httpx

from src.models import SaveResult, ScheduleSnapshot
from src.sheet import parse_schedule

logger = logging.getLogger(__name__)

LOAD_ACTION = "getSchedule"


class StoreError(Exception):
    """Load or save against the schedule sheet failed."""


class StoreConfigError(StoreError):
    pass


class ScheduleStore:
    def __init__(self, url: str, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.Client:
        if not self.url:
            raise StoreConfigError("Scheduler API URL is not configured")
        return httpx.Client(timeout=self.timeout, transport=self._transport,
                            follow_redirects=True)

    def fetch(self, date: str) -> Any:
        with self._client() as client:
            try:
                r = client.get(self.url, params={"action": LOAD_ACTION, "date": date})
                r.raise_for_status()
                return r.json()
            except httpx.HTTPError as e:
                raise StoreError(f"Could not load schedule for {date}: {e}") from e
            except ValueError as e:
                raise StoreError(f"Schedule for {date} is not valid JSON") from e

    def load(self, date: str) -> ScheduleSnapshot:
        payload = self.fetch(date)
        if isinstance(payload, dict) and payload.get("success") is False:
            error = payload.get("error") or {}
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise StoreError(message or f"Sheet refused to load {date}")
        try:
            snapshot = parse_schedule(payload, date)
        except ValueError as e:
            raise StoreError(str(e)) from e
        logger.info("Loaded schedule for %s (%d crews)", date, len(snapshot.crews))
        return snapshot

    def save(self, date: str, values: list[list[str]], tags: dict) -> SaveResult:
        body = {"date": date, "values": values, "tags": tags}
        with self._client() as client:
            try:
                client.post(self.url, json=body)
            except httpx.HTTPError as e:
                raise StoreError(f"Could not send schedule for {date}: {e}") from e
        logger.info("Sent schedule for %s (%d rows)", date, len(values) - 1)
        return SaveResult(ack=None, message="Sent to sheet; the sheet does not confirm writes")
