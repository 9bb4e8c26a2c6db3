"""CLI d'administration du catalogue (Typer + Rich)."""
