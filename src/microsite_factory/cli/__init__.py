"""Operator CLI (Typer + Rich)."""
