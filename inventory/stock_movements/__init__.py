"""
Module Stock Movements - Entrées/sorties de stock validées et leur historique
"""
