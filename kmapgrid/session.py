"""Request sequencing for the solve form: only the newest request may publish."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Optional

logger = logging.getLogger(__name__)


class SolveSequencer:
    """Hands out increasing request ids and drops results from superseded requests."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._latest_issued = 0
        self._accepted_id = 0
        self._result: Optional[Any] = None

    def issue(self) -> int:
        with self._lock:
            self._latest_issued = next(self._counter)
            return self._latest_issued

    def accept(self, request_id: int, result: Any) -> bool:
        """Store result if request_id is the latest issued; return whether it was kept."""
        with self._lock:
            if request_id != self._latest_issued or request_id <= self._accepted_id:
                logger.debug(
                    "Dropping stale result for request %d (latest %d)",
                    request_id, self._latest_issued,
                )
                return False
            self._accepted_id = request_id
            self._result = result
            return True

    def clear(self) -> None:
        with self._lock:
            self._result = None

    @property
    def latest_issued(self) -> int:
        return self._latest_issued

    @property
    def result(self) -> Optional[Any]:
        return self._result
