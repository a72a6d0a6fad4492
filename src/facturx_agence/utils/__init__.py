"""Utilitaires internes (écriture XML)."""
