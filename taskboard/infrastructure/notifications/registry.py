"""Process-wide mapping from a user to their live websocket connection."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Keep at most one active connection per user.

    The last connection to authenticate wins; an older connection for the same
    user is superseded without being closed. Every method is synchronous so a
    lookup and the send that follows it never straddle a stale binding.
    """

    def __init__(self) -> None:
        self._connections: dict[int, Any] = {}

    def bind(self, user_id: int, connection: Any) -> None:
        """Register ``connection`` as the live handle for ``user_id``."""

        previous = self._connections.get(user_id)
        self._connections[user_id] = connection
        if previous is not None and previous is not connection:
            logger.info("Superseded previous connection for user %s", user_id)

    def unbind(self, user_id: int, connection: Any | None = None) -> None:
        """Forget the binding for ``user_id``.

        When ``connection`` is given, the binding is only removed if it still
        points at that connection, so a late disconnect of a superseded socket
        does not drop the newer one.
        """

        current = self._connections.get(user_id)
        if current is None:
            return
        if connection is not None and current is not connection:
            return
        del self._connections[user_id]

    def lookup(self, user_id: int) -> Any | None:
        """Return the live connection for ``user_id`` or ``None``."""

        return self._connections.get(user_id)

    def clear(self) -> None:
        self._connections.clear()

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._connections

    def __len__(self) -> int:
        return len(self._connections)


__all__ = ["SessionRegistry"]
