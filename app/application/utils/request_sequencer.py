from __future__ import annotations

import threading


class RequestSequencer:
    """
    Hands out monotonic request tokens per channel.
    A response is applied only if its token is still the newest one issued
    for that channel; anything older is stale and gets dropped.
    """

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}
        self._lock = threading.Lock()

    def issue(self, channel: str) -> int:
        with self._lock:
            token = self._latest.get(channel, 0) + 1
            self._latest[channel] = token
            return token

    def is_current(self, channel: str, token: int) -> bool:
        with self._lock:
            return self._latest.get(channel) == token
