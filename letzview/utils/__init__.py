"""Utilitaires transverses (constantes, normalisation de texte)."""
