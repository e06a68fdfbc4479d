"""
Module Categories - Gestion des catégories de produits
"""
