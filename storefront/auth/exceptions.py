"""
Exceptions HTTP du module d'authentification.
"""
from fastapi import HTTPException, status

from storefront.auth.constants import (
    ERROR_PERMISSION_DENIED,
    ERROR_TOKEN_INVALID,
    ERROR_TOKEN_MISSING,
    HEADER_WWW_AUTHENTICATE,
    HEADER_WWW_AUTHENTICATE_VALUE,
)


class TokenInvalidException(HTTPException):
    """Exception pour un token JWT invalide ou un utilisateur inconnu."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ERROR_TOKEN_INVALID,
            headers={HEADER_WWW_AUTHENTICATE: HEADER_WWW_AUTHENTICATE_VALUE},
        )


class TokenMissingException(HTTPException):
    """Exception pour un token JWT manquant."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ERROR_TOKEN_MISSING,
            headers={HEADER_WWW_AUTHENTICATE: HEADER_WWW_AUTHENTICATE_VALUE},
        )


class PermissionDeniedException(HTTPException):
    """Exception pour une permission refusée (rôle admin requis)."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=ERROR_PERMISSION_DENIED,
        )
