"""Notification sink that stores notifications in the database (delivery to the user is someone else's job)"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.models import PlayerId
from src.db.schema import DBNotification

GAME_INVITE = "game_invite"


class SQLNotificationSink:
    def __init__(self, db_session: Session, notification_type: str = GAME_INVITE) -> None:
        self.db = db_session
        self.notification_type = notification_type

    def notify(
        self, recipient: PlayerId, message: str, actor: Optional[PlayerId] = None
    ) -> None:
        notification = DBNotification(
            id=uuid4(),
            recipient_id=recipient,
            actor_id=actor,
            type=self.notification_type,
            message=message,
            is_read=False,
        )
        self.db.add(notification)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def unread_for(self, recipient: PlayerId) -> list[DBNotification]:
        query = (
            select(DBNotification)
            .where(DBNotification.recipient_id == recipient)
            .where(DBNotification.is_read.is_(False))
            .order_by(DBNotification.created_at)
        )
        return list(self.db.scalars(query))
