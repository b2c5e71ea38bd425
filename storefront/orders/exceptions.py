"""Exceptions spécifiques au domaine Order."""
from typing import List

from storefront.core.exceptions import (
    AuthorizationException,
    NotFoundException,
    PersistenceException,
    ValidationException,
)


class OrderNotFoundException(NotFoundException):
    """Levée lorsqu'une commande spécifique n'est pas trouvée."""
    def __init__(self, order_id: int):
        super().__init__(f"Commande avec ID {order_id} non trouvée.")
        self.order_id = order_id


class OrderValidationException(ValidationException):
    """Levée lorsque la demande de commande est incomplète (panier vide, livraison manquante...)."""
    pass


class InvalidOrderStatusException(ValidationException):
    """Levée lorsque le statut fourni pour une commande est invalide."""
    def __init__(self, status: str, allowed: List[str]):
        allowed_str = ", ".join(allowed)
        super().__init__(f"Le statut '{status}' est invalide. Statuts autorisés: {allowed_str}.")
        self.status = status
        self.allowed = allowed


class OrderStatusTransitionException(ValidationException):
    """Levée lorsque la transition de statut demandée n'est pas permise."""
    def __init__(self, current: str, target: str):
        super().__init__(f"Impossible de passer la commande de '{current}' à '{target}'.")
        self.current = current
        self.target = target


class OrderAccessForbiddenException(AuthorizationException):
    """Levée lorsque le demandeur n'est ni propriétaire de la commande ni admin."""
    def __init__(self, order_id: int):
        super().__init__(f"Accès refusé à la commande {order_id}.")
        self.order_id = order_id


class OrderCreationFailedException(PersistenceException):
    """Levée lorsque la création de la commande échoue côté stockage."""
    pass


class OrderUpdateFailedException(PersistenceException):
    """Levée lorsque la mise à jour du statut (et la restitution du stock) échoue."""
    pass
