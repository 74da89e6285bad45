"""One user's working session: the board, the sheet it syncs with, and the
transient status line shown after a load or save.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from src import roster
from src.board import AssignmentBoard
from src.models import SaveResult, StatusMessage
from src.remote_store import ScheduleStore, StoreError
from src.sheet import schedule_values

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class SchedulerSession:
    def __init__(self, store: ScheduleStore, board: Optional[AssignmentBoard] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.board = board or AssignmentBoard()
        self.clock = clock
        self.status: Optional[StatusMessage] = None
        self.last_update = ""
        self._in_flight: set[str] = set()

    def busy(self, action: str) -> bool:
        return action in self._in_flight

    def _post(self, level: str, text: str):
        self.status = StatusMessage(level=level, text=text, posted_at=self.clock())

    def current_status(self) -> Optional[StatusMessage]:
        """Status message still on screen, clearing it once it has expired."""
        if self.status and self.status.is_expired(self.clock()):
            self.status = None
        return self.status

    def load(self, date: str) -> bool:
        """Replace the board with the sheet's schedule for ``date``.

        Returns False without contacting the sheet when a load is already
        running. On failure the board is left as it was.
        """
        if self.busy("load"):
            return False
        self._in_flight.add("load")
        try:
            snapshot = self.store.load(date)
            self.board.apply_snapshot(snapshot)
            self.last_update = snapshot.last_update
            self._post("success", f"Loaded schedule for {date}")
        except StoreError as e:
            logger.warning("Load for %s failed: %s", date, e)
            self._post("error", str(e))
        finally:
            self._in_flight.discard("load")
        return True

    def save(self, date: str) -> Optional[SaveResult]:
        """Send the board for ``date``. Returns None if a save is already running."""
        if self.busy("save"):
            return None
        self._in_flight.add("save")
        try:
            stamp = self.clock().strftime(TIMESTAMP_FORMAT)
            values = schedule_values(self.board, date, stamp)
            tags = roster.roster_tags(self.board.people, self.board.trucks, self.board.equipment)
            result = self.store.save(date, values, tags)
            self.last_update = stamp
            self._post("success", f"Schedule for {date} sent. {result.message}")
            return result
        except StoreError as e:
            logger.error("Save for %s failed: %s", date, e)
            self._post("error", str(e))
            return SaveResult(ack=False, message=str(e))
        finally:
            self._in_flight.discard("save")
