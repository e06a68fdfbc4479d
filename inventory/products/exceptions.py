"""Exceptions spécifiques au module Products."""

class ProductNotFoundException(Exception):
    """Levée lorsqu'un produit spécifique n'est pas trouvé."""
    def __init__(self, product_id: int):
        self.product_id = product_id
        self.message = f"Produit avec ID {product_id} non trouvé."
        super().__init__(self.message)

class ProductHasMovementsException(Exception):
    """Levée lors de la suppression d'un produit possédant un historique de mouvements."""
    def __init__(self, product_id: int):
        self.product_id = product_id
        self.message = f"Le produit {product_id} possède des mouvements de stock et ne peut pas être supprimé."
        super().__init__(self.message)
