class StockMovementNotFoundException(Exception):
    """Exception levée lorsqu'un mouvement de stock n'est pas trouvé."""
    def __init__(self, movement_id: int = None, message: str = "Mouvement de stock non trouvé"):
        self.movement_id = movement_id
        self.message = f"{message}{f' (ID: {movement_id})' if movement_id else ''}."
        super().__init__(self.message)

class StockConflictException(Exception):
    """Exception levée lorsque le stock a été modifié par une autre opération pendant la validation."""
    def __init__(self, product_id: int, expected_quantity: int):
        self.product_id = product_id
        self.expected_quantity = expected_quantity
        self.message = (
            f"Le stock du produit {product_id} a changé pendant l'opération "
            f"(quantité lue: {expected_quantity}). Veuillez réessayer."
        )
        super().__init__(self.message)
