import logging
import uuid as uuid_pkg
from typing import Dict, List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from app import config
from app.exceptions import NotFoundError
from app.models import models, schemas
from app.services.pagination import paginate
from app.services.search import character_criteria

logger = logging.getLogger(__name__)


class CharacterService:
    def __init__(self, db: Session):
        self.db = db
        self.limit = config.PAGINATION_LIMIT

    def _page(self, criteria: list, page: int) -> Dict:
        query = (
            self.db.query(models.Character)
            .filter(*criteria)
            .order_by(models.Character.id)
        )
        result = paginate(query, page, self.limit)
        result["result"] = [
            schemas.Character.model_validate(character) for character in result["result"]
        ]
        return result

    def list_characters(self, page: int = 1) -> Dict:
        return self._page([], page)

    def search_characters(self, names: Optional[List[str]], page: int = 1) -> Dict:
        """
        Characters whose name contains any of `names` (case-insensitive).

        No names means no narrowing: the result equals the index.
        """
        logger.debug(f"Character search names={names} page={page}")
        return self._page(character_criteria(names), page)

    def get_character(self, character_id: str) -> schemas.Character:
        # Malformed ids raise ValueError and surface as an internal error
        character = self.db.get(models.Character, uuid_pkg.UUID(character_id))
        if not character:
            raise NotFoundError()
        return schemas.Character.model_validate(character)

    def random_character(self) -> schemas.Character:
        character = (
            self.db.query(models.Character).order_by(func.random()).limit(1).first()
        )
        if not character:
            raise NotFoundError()
        return schemas.Character.model_validate(character)
