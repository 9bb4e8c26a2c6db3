"""Routes de l'application web."""
