import logging
from typing import Optional

from fastcrud import FastCRUD
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.users.models import User, UserRead

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository:
    """Accès en lecture à la table des utilisateurs."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.crud = FastCRUD(User)

    async def get_by_id(self, user_id: int) -> Optional[UserRead]:
        logger.debug(f"[UserRepository] Getting user by ID: {user_id}")
        return await self.crud.get(
            db=self.db,
            schema_to_select=UserRead,
            return_as_model=True,
            id=user_id,
        )
