"""Central state for the MIDI stream monitor.

Keeps message counters and a bounded history of the
most recently decoded messages.
"""

import threading
import time
from collections import Counter, deque
from typing import Any, Deque, Dict, List

from ..logic.messages import ParsedMessage

DEFAULT_HISTORY_SIZE = 100


class MonitorState:
    """Counters and recent history, safe to read from the web API thread."""

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        self.history_size = history_size
        self._lock = threading.Lock()
        self._counts: Counter = Counter()
        self._history: Deque[Dict[str, Any]] = deque(maxlen=history_size)
        self.total_messages = 0
        self.sysex_dumps = 0
        self.sysex_bytes = 0
        self.started_at = time.time()

    def record_message(self, message: ParsedMessage):
        entry = message.as_dict()
        entry['timestamp'] = time.time()
        with self._lock:
            self._counts[message.name] += 1
            self.total_messages += 1
            self._history.append(entry)

    def record_sysex(self, payload: bytes):
        with self._lock:
            self.sysex_dumps += 1
            self.sysex_bytes += len(payload)

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def recent(self, limit: int = 0) -> List[Dict[str, Any]]:
        """Most recent messages, oldest first; limit 0 returns all kept."""
        with self._lock:
            entries = list(self._history)
        if limit > 0:
            entries = entries[-limit:]
        return entries

    def clear(self):
        with self._lock:
            self._counts.clear()
            self._history.clear()
            self.total_messages = 0
            self.sysex_dumps = 0
            self.sysex_bytes = 0
            self.started_at = time.time()
