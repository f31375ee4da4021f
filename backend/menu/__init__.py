"""
Module 'menu': catalogue figé des plats et configuration du tunnel exposée en JSON.
"""

from .catalog import MenuItem, MENU, get_item, prices, names

__all__ = ["MenuItem", "MENU", "get_item", "prices", "names"]
