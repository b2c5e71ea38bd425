"""
Dépendances FastAPI pour l'authentification.

Fournit l'utilisateur courant à partir du token Bearer et la vérification
du rôle admin.
"""
import logging
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.auth.constants import OAUTH2_TOKEN_URL
from storefront.auth.exceptions import PermissionDeniedException, TokenInvalidException, TokenMissingException
from storefront.auth.security import decode_access_token
from storefront.database import get_db_session
from storefront.users.models import UserRead
from storefront.users.repositories import SQLAlchemyUserRepository

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=OAUTH2_TOKEN_URL, auto_error=False)


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db_session=session)


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    user_repository: Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)],
) -> UserRead:
    """
    Vérifie le token JWT et retourne l'utilisateur courant.

    Raises:
        TokenMissingException: Si le token est manquant
        TokenInvalidException: Si le token est invalide ou l'utilisateur inconnu
    """
    if token is None:
        logger.warning("Token manquant dans la requête.")
        raise TokenMissingException()

    user_id = decode_access_token(token)
    if user_id is None:
        raise TokenInvalidException()

    user = await user_repository.get_by_id(user_id)
    if user is None:
        logger.warning(f"Token valide mais utilisateur {user_id} introuvable.")
        raise TokenInvalidException()

    logger.debug(f"Utilisateur authentifié: ID {user.id}")
    return user


async def get_current_admin_user(
    current_user: Annotated[UserRead, Depends(get_current_user)]
) -> UserRead:
    """Vérifie que l'utilisateur courant est un administrateur."""
    if not current_user.is_admin:
        logger.warning(f"Tentative d'accès à une ressource admin par un utilisateur non-admin: ID {current_user.id}")
        raise PermissionDeniedException()
    return current_user


CurrentUser = Annotated[UserRead, Depends(get_current_user)]
CurrentAdmin = Annotated[UserRead, Depends(get_current_admin_user)]
