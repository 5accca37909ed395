"""Sheetkeeper: character sheet rules and optimistic sync for tabletop RPGs."""

__version__ = "0.1.0"
