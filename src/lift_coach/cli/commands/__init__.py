"""Typer command modules; importing one registers its commands."""
