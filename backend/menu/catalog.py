"""
Catalogue des plats (données figées au chargement du module).
- Prix unitaires en centimes (entiers).
- Les identifiants sont utilisés tels quels par le panier et les templates (data-meal-id).
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# module backend.menu.catalog
@dataclass(frozen=True)
class MenuItem:
    id: str
    name: str
    unit_price: int
    description: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)


MENU: Tuple[MenuItem, ...] = (
    MenuItem("chicken-bowl", "Lemon Herb Chicken Bowl", 1250,
             "Grilled chicken, quinoa, roasted vegetables, tahini.", ("high-protein",)),
    MenuItem("salmon-rice", "Teriyaki Salmon & Rice", 1450,
             "Glazed salmon, jasmine rice, sesame greens.", ("fish", "sesame")),
    MenuItem("beef-chili", "Slow-Cooked Beef Chili", 1150,
             "Beans, peppers, smoked paprika, cheddar.", ("dairy",)),
    MenuItem("veggie-curry", "Chickpea Coconut Curry", 1050,
             "Chickpeas, spinach, coconut milk, basmati.", ("vegan",)),
    MenuItem("pesto-pasta", "Basil Pesto Pasta", 1100,
             "Penne, pesto, cherry tomatoes, parmesan.", ("vegetarian", "nuts", "gluten", "dairy")),
    MenuItem("breakfast-box", "Breakfast Box", 900,
             "Egg bites, turkey sausage, sweet potato hash.", ("egg",)),
)

_BY_ID: Dict[str, MenuItem] = {item.id: item for item in MENU}


def get_item(item_id: str) -> Optional[MenuItem]:
    """Retourne le plat ou None si l'identifiant est inconnu."""
    return _BY_ID.get(str(item_id or ""))


def prices() -> Dict[str, int]:
    """Table {id: prix unitaire en centimes}."""
    return {item.id: item.unit_price for item in MENU}


def names() -> Dict[str, str]:
    return {item.id: item.name for item in MENU}
