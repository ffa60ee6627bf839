"""Player directory (identity resolution + display names) backed by the players table"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import Player, PlayerId
from src.db.schema import DBPlayer

ANONYMOUS_DISPLAY_NAME = "A player"


class SQLPlayerDirectory:
    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def resolve(self, token: str) -> Player | None:
        """Map the caller's credential (token identifier issued by the auth provider) to a player."""
        query = select(DBPlayer).where(DBPlayer.token_identifier == token)
        player_db = self.db.scalar(query)
        if player_db is None:
            return None
        return self._to_player(player_db)

    def get_player(self, player_id: PlayerId) -> Player | None:
        player_db = self.db.get(DBPlayer, player_id)
        if player_db is None:
            return None
        return self._to_player(player_db)

    def register_player(
        self, token: str, name: Optional[str] = None, username: Optional[str] = None
    ) -> Player:
        player_db = DBPlayer(
            id=uuid4(), token_identifier=token, name=name, username=username
        )
        self.db.add(player_db)
        self.db.commit()
        self.db.refresh(player_db)
        return self._to_player(player_db)

    def _to_player(self, player_db: DBPlayer) -> Player:
        # prefer the full name, then the username
        display_name = player_db.name or player_db.username or ANONYMOUS_DISPLAY_NAME
        return Player(id=player_db.id, display_name=display_name)
