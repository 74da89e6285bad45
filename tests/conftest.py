from __future__ import annotations

import json
from datetime import datetime, timedelta

import httpx
import pytest

from src.board import AssignmentBoard
from src.remote_store import ScheduleStore
from src.session import SchedulerSession
from src.sheet import payload_from_values

SHEET_URL = "https://sheet.test/macros/exec"


class FakeSheet:
    """Sheet script stand-in that keeps whatever rows are posted to it."""

    def __init__(self) -> None:
        self.saved: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            body = json.loads(request.content)
            self.saved[body["date"]] = body
            return httpx.Response(200, text="<html>opaque</html>")
        body = self.saved.get(request.url.params.get("date"))
        if body is None:
            return httpx.Response(200, json={"lastUpdate": ""})
        return httpx.Response(200, json=payload_from_values(body["values"]))


class Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 4, 15, 7, 30, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def board() -> AssignmentBoard:
    return AssignmentBoard()


@pytest.fixture()
def sheet() -> FakeSheet:
    return FakeSheet()


@pytest.fixture()
def store(sheet: FakeSheet) -> ScheduleStore:
    return ScheduleStore(SHEET_URL, transport=httpx.MockTransport(sheet))


@pytest.fixture()
def clock() -> Clock:
    return Clock()


@pytest.fixture()
def session(store: ScheduleStore, clock: Clock) -> SchedulerSession:
    return SchedulerSession(store, clock=clock)
