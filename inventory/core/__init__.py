"""
Éléments partagés entre les modules (schémas communs).
"""
