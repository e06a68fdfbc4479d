"""
Module Stock - Alertes de stock bas et synthèse de l'inventaire
"""
