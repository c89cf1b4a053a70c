"""Reply sinks that hold replies for surfaces which render them later."""

from __future__ import annotations

import threading


class BufferedReplySink:
    """Collects replies per channel until a surface drains them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, list[str]] = {}

    def send_reply(self, channel: str, text: str) -> None:
        with self._lock:
            self._pending.setdefault(channel, []).append(text)

    def drain(self, channel: str) -> list[str]:
        with self._lock:
            return self._pending.pop(channel, [])
