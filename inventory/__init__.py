"""
Inventory - API de gestion de stock (produits, catégories, mouvements et alertes).
"""
