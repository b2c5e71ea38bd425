"""Taxonomie commune des exceptions métier.

Chaque module de domaine dérive ses exceptions de l'une de ces classes ;
les routeurs les traduisent en réponses HTTP (400, 403, 404, 500).
"""


class DomainException(Exception):
    """Classe de base pour les exceptions métier de la boutique."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationException(DomainException):
    """Données d'entrée invalides ou incomplètes."""
    pass


class NotFoundException(DomainException):
    """Ressource introuvable (produit, commande, ligne de panier)."""
    pass


class AuthorizationException(DomainException):
    """L'utilisateur n'est ni propriétaire de la ressource ni administrateur."""
    pass


class PersistenceException(DomainException):
    """Échec opaque de la couche de stockage."""
    pass
