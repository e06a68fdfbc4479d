"""Exceptions personnalisées pour le module categories."""

class CategoryNotFoundException(Exception):
    """Exception levée lorsqu'une catégorie n'est pas trouvée."""
    def __init__(self, category_id: int = None, message: str = "Catégorie non trouvée"):
        self.category_id = category_id
        self.message = f"{message}{f' (ID: {category_id})' if category_id else ''}."
        super().__init__(self.message)

class DuplicateCategoryNameException(Exception):
    """Exception levée lorsqu'une catégorie avec le même nom existe déjà."""
    def __init__(self, name: str):
        self.name = name
        self.message = f"Une catégorie avec le nom '{name}' existe déjà."
        super().__init__(self.message)

class CategoryInUseException(Exception):
    """Exception levée lors de la suppression d'une catégorie encore référencée par des produits."""
    def __init__(self, category_id: int, product_count: int):
        self.category_id = category_id
        self.product_count = product_count
        self.message = f"La catégorie {category_id} est utilisée par {product_count} produit(s)."
        super().__init__(self.message)
