"""Dataclasses for Crew Board entities."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

CREW_COUNT = 8

ROLES = ["member", "crew-leader", "manager"]
EQUIPMENT_KINDS = ["trailer", "machine"]
ITEM_KINDS = ["person", "vehicle", "equipment"]

STATUS_TTL = timedelta(seconds=5)


@dataclass(frozen=True)
class Person:
    name: str
    role: str = "member"  # member / crew-leader / manager


@dataclass(frozen=True)
class Vehicle:
    name: str


@dataclass(frozen=True)
class Equipment:
    name: str
    kind: str = "machine"  # trailer / machine


def kind_of(item) -> str:
    """Board kind for a roster item: person, vehicle or equipment."""
    if isinstance(item, Person):
        return "person"
    if isinstance(item, Vehicle):
        return "vehicle"
    if isinstance(item, Equipment):
        return "equipment"
    raise TypeError(f"Not a roster item: {item!r}")


@dataclass
class Crew:
    number: int
    people: list[str] = field(default_factory=list)
    vehicles: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    job: str = ""
    salesman: str = ""

    def names(self, kind: str) -> list[str]:
        if kind == "person":
            return self.people
        if kind == "vehicle":
            return self.vehicles
        if kind == "equipment":
            return self.equipment
        raise ValueError(f"Unknown kind: {kind}")

    def has_assignments(self) -> bool:
        return bool(self.people or self.vehicles or self.equipment)

    def is_empty(self) -> bool:
        return not self.has_assignments() and not self.job.strip() and not self.salesman.strip()


@dataclass
class ScheduleSnapshot:
    date: str = ""
    crews: list[Crew] = field(default_factory=list)
    absent: list[str] = field(default_factory=list)
    out_of_service: list[str] = field(default_factory=list)
    last_update: str = ""


@dataclass(frozen=True)
class SaveResult:
    # True / False when the store can confirm, None when it cannot tell.
    ack: Optional[bool] = None
    message: str = ""


@dataclass(frozen=True)
class StatusMessage:
    level: str  # success / error
    text: str
    posted_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now()
        return now - self.posted_at >= STATUS_TTL
