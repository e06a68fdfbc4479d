"""
Module Products - Gestion des produits et de leur niveau de stock
"""
