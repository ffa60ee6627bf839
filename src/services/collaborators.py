"""
Protocols for the collaborators the service relies on, next to the GameRepository:
* who is calling (identity resolution) and what to call them (display names)
* where to drop a notification for a player
"""

from typing import Optional, Protocol

from loguru import logger

from src.core.models import Player, PlayerId


class PlayerDirectory(Protocol):
    def resolve(self, token: str) -> Player | None:
        """Map the caller's credential to a player, if any."""
        ...

    def get_player(self, player_id: PlayerId) -> Player | None:
        """Look up a player by ID (ex. to show the participants of a game)."""
        ...


class NotificationSink(Protocol):
    def notify(
        self, recipient: PlayerId, message: str, actor: Optional[PlayerId] = None
    ) -> None:
        """Request a notification for the recipient. Delivery is up to the implementation."""
        ...


class LoggingNotificationSink:
    """Fallback sink: only writes the notification to the log."""

    def notify(
        self, recipient: PlayerId, message: str, actor: Optional[PlayerId] = None
    ) -> None:
        logger.info(f"Notification for {recipient} (from {actor}): {message}")
