"""Capa de presentación (Typer + Rich)."""
