"""Exceptions spécifiques au panier."""
from storefront.core.exceptions import NotFoundException


class CartItemNotFoundException(NotFoundException):
    """Levée lorsqu'une ligne de panier n'existe pas ou n'appartient pas à l'utilisateur."""
    def __init__(self, item_id: int):
        super().__init__(f"Ligne de panier {item_id} non trouvée.")
        self.item_id = item_id
