"""Assignment board: which roster items are on which of the 8 crews.

Every roster item is in exactly one place at a time: the available pool, a
single crew, or the unavailable bin (absent people, out-of-service trucks and
equipment). Commands mutate the board synchronously; availability is derived
from the current state on every call.
"""
import logging
from typing import Iterable, Optional

from src import roster
from src.models import (
    CREW_COUNT,
    Crew,
    Equipment,
    Person,
    ScheduleSnapshot,
    Vehicle,
    kind_of,
)

logger = logging.getLogger(__name__)


class BoardError(Exception):
    """Base error for rejected board commands."""


class AssignmentError(BoardError):
    pass


def _empty_crews() -> dict[int, Crew]:
    return {n: Crew(number=n) for n in range(1, CREW_COUNT + 1)}


class AssignmentBoard:
    def __init__(self,
                 people: Iterable[Person] = roster.PEOPLE,
                 trucks: Iterable[Vehicle] = roster.TRUCKS,
                 equipment: Iterable[Equipment] = roster.EQUIPMENT):
        self.people = tuple(people)
        self.trucks = tuple(trucks)
        self.equipment = tuple(equipment)
        self.crews = _empty_crews()
        self.absent: list[str] = []
        self.out_of_service: list[str] = []

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def crew(self, crew_number: int) -> Crew:
        if crew_number not in self.crews:
            raise KeyError(f"No crew {crew_number} (crews are 1-{CREW_COUNT})")
        return self.crews[crew_number]

    def roster_for(self, kind: str) -> tuple:
        if kind == "person":
            return self.people
        if kind == "vehicle":
            return self.trucks
        if kind == "equipment":
            return self.equipment
        raise ValueError(f"Unknown kind: {kind}")

    def _unavailable_for(self, kind: str) -> list[str]:
        return self.absent if kind == "person" else self.out_of_service

    def find(self, name: str, kind: str):
        return next((i for i in self.roster_for(kind) if i.name == name), None)

    def location_of(self, name: str, kind: str) -> Optional[int]:
        """Crew number holding ``name``, or None when it is not assigned."""
        for number, crew in self.crews.items():
            if name in crew.names(kind):
                return number
        return None

    def is_unavailable(self, name: str, kind: str) -> bool:
        return name in self._unavailable_for(kind)

    # ------------------------------------------------------------------
    # Assignment commands
    # ------------------------------------------------------------------

    def assign(self, item, crew_number: int, kind: str):
        """Add ``item`` to crew ``crew_number`` under ``kind``.

        Idempotent for the same crew. The item must not be on another crew;
        use ``move`` to take it from one crew to another.
        """
        crew = self.crew(crew_number)
        if kind_of(item) != kind:
            raise AssignmentError(f"{item.name} is a {kind_of(item)}, not a {kind}")
        if self.find(item.name, kind) != item:
            raise AssignmentError(f"{item.name} is not on the {kind} roster")
        if self.is_unavailable(item.name, kind):
            raise AssignmentError(f"{item.name} is marked unavailable")

        current = self.location_of(item.name, kind)
        if current == crew_number:
            return
        if current is not None:
            raise AssignmentError(f"{item.name} is already on crew {current}")

        crew.names(kind).append(item.name)
        logger.debug("Assigned %s %s to crew %s", kind, item.name, crew_number)

    def unassign(self, crew_number: int, name: str, kind: str):
        names = self.crew(crew_number).names(kind)
        if name in names:
            names.remove(name)
            logger.debug("Removed %s %s from crew %s", kind, name, crew_number)

    def move(self, item, crew_number: int, kind: str):
        """Take ``item`` off whatever crew holds it and put it on ``crew_number``."""
        self.crew(crew_number)
        if kind_of(item) != kind:
            raise AssignmentError(f"{item.name} is a {kind_of(item)}, not a {kind}")
        if self.is_unavailable(item.name, kind):
            raise AssignmentError(f"{item.name} is marked unavailable")
        source = self.location_of(item.name, kind)
        if source == crew_number:
            return
        if source is not None:
            self.unassign(source, item.name, kind)
        try:
            self.assign(item, crew_number, kind)
        except AssignmentError:
            if source is not None:
                self.crew(source).names(kind).append(item.name)
            raise
        logger.debug("Moved %s %s from crew %s to crew %s", kind, item.name, source, crew_number)

    def _pull_from_crews(self, name: str, kind: str):
        number = self.location_of(name, kind)
        if number is not None:
            self.unassign(number, name, kind)

    # ------------------------------------------------------------------
    # Availability commands
    # ------------------------------------------------------------------

    def mark_absent(self, person: Person):
        if self.find(person.name, "person") is None:
            raise AssignmentError(f"{person.name} is not on the people roster")
        self._pull_from_crews(person.name, "person")
        if person.name not in self.absent:
            self.absent.append(person.name)
            logger.debug("Marked %s absent", person.name)

    def unmark_absent(self, name: str):
        if name in self.absent:
            self.absent.remove(name)

    def mark_out_of_service(self, item):
        kind = kind_of(item)
        if kind == "person":
            raise AssignmentError("People are marked absent, not out of service")
        if self.find(item.name, kind) is None:
            raise AssignmentError(f"{item.name} is not on the {kind} roster")
        self._pull_from_crews(item.name, kind)
        if item.name not in self.out_of_service:
            self.out_of_service.append(item.name)
            logger.debug("Marked %s out of service", item.name)

    def unmark_out_of_service(self, name: str):
        if name in self.out_of_service:
            self.out_of_service.remove(name)

    # ------------------------------------------------------------------
    # Free-text fields
    # ------------------------------------------------------------------

    def set_crew_job(self, crew_number: int, text: str):
        self.crew(crew_number).job = text

    def set_crew_salesman(self, crew_number: int, text: str):
        self.crew(crew_number).salesman = text

    def clear_crew(self, crew_number: int):
        self.crew(crew_number)
        self.crews[crew_number] = Crew(number=crew_number)

    def clear(self):
        self.crews = _empty_crews()
        self.absent = []
        self.out_of_service = []

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def _available(self, kind: str) -> list:
        assigned = {n for crew in self.crews.values() for n in crew.names(kind)}
        unavailable = set(self._unavailable_for(kind))
        return [i for i in self.roster_for(kind)
                if i.name not in assigned and i.name not in unavailable]

    def available_people(self) -> list[Person]:
        return self._available("person")

    def available_trucks(self) -> list[Vehicle]:
        return self._available("vehicle")

    def available_equipment(self) -> list[Equipment]:
        return self._available("equipment")

    def crews_in_use(self) -> int:
        return sum(1 for crew in self.crews.values() if crew.has_assignments())

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_snapshot(self, date: str, last_update: str = "") -> ScheduleSnapshot:
        return ScheduleSnapshot(
            date=date,
            crews=[Crew(number=c.number, people=list(c.people), vehicles=list(c.vehicles),
                        equipment=list(c.equipment), job=c.job, salesman=c.salesman)
                   for c in self.crews.values()],
            absent=list(self.absent),
            out_of_service=list(self.out_of_service),
            last_update=last_update,
        )

    def apply_snapshot(self, snapshot: ScheduleSnapshot):
        """Replace every crew and both unavailable sets with ``snapshot``.

        Crew numbers outside 1..8 and names not on the rosters are dropped.
        A name already placed is not placed again: the first crew wins and an
        assignment wins over an absence or out-of-service entry.
        """
        crews = _empty_crews()
        placed: dict[str, set[str]] = {"person": set(), "vehicle": set(), "equipment": set()}

        for incoming in snapshot.crews:
            if incoming.number not in crews:
                logger.warning("Ignoring crew %s from snapshot %s", incoming.number, snapshot.date)
                continue
            crew = crews[incoming.number]
            crew.job = incoming.job
            crew.salesman = incoming.salesman
            for kind in ("person", "vehicle", "equipment"):
                for name in incoming.names(kind):
                    if self.find(name, kind) is None:
                        logger.warning("Dropping unknown %s %r from crew %s", kind, name, crew.number)
                        continue
                    if name in placed[kind]:
                        logger.warning("Dropping duplicate %s %r from crew %s", kind, name, crew.number)
                        continue
                    placed[kind].add(name)
                    crew.names(kind).append(name)

        absent = []
        for name in snapshot.absent:
            if self.find(name, "person") and name not in placed["person"] and name not in absent:
                absent.append(name)

        out_of_service = []
        for name in snapshot.out_of_service:
            kinds = [k for k in ("vehicle", "equipment") if self.find(name, k)]
            if not kinds or any(name in placed[k] for k in kinds) or name in out_of_service:
                continue
            out_of_service.append(name)

        self.crews = crews
        self.absent = absent
        self.out_of_service = out_of_service
