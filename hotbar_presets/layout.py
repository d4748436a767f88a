"""Inventory screen layout, kept free of tkinter so it can be tested headless."""
from __future__ import annotations

import dataclasses
from typing import Dict, List as PyList, Optional

from .models import Enchantment, Item, ItemTag

INVENTORY_GRID: PyList[PyList[int]] = [
    [9, 10, 11, 12, 13, 14, 15, 16, 17],
    [18, 19, 20, 21, 22, 23, 24, 25, 26],
    [27, 28, 29, 30, 31, 32, 33, 34, 35],
    [0, 1, 2, 3, 4, 5, 6, 7, 8],
]
EQUIPMENT_SLOTS = [39, 38, 37, 36, 40]
EQUIPMENT_SLOT_NAMES: Dict[int, str] = {
    36: "Boots",
    37: "Leggings",
    38: "Chestplate",
    39: "Helmet",
    40: "Offhand",
}
MAX_ENCHANTMENT_LEVEL = 255


def slot_label(ui_slot: int) -> str:
    return EQUIPMENT_SLOT_NAMES.get(ui_slot, f"Slot {ui_slot}")


def format_slot_text(ui_slot: int, item: Optional[Item]) -> str:
    name = slot_label(ui_slot)
    if item is None or not item.id:
        return f"{name}\nEmpty"
    item_name = item.id.split(":", 1)[-1]
    if item.tag is not None and item.tag.enchantments:
        item_name += " *"
    return f"{name}\n{item_name} ×{item.count}"


def parse_int(value: str, *, allow_negative: bool = True) -> Optional[int]:
    try:
        number = int(value, 0)
    except ValueError:
        return None
    if not allow_negative and number < 0:
        return None
    return number


def format_enchantments(enchantments: PyList[Enchantment]) -> str:
    return ", ".join(f"{e.id} {e.level}" for e in enchantments)


def parse_enchantments(value: str) -> Optional[PyList[Enchantment]]:
    """Parse ``"minecraft:sharpness 5, minecraft:unbreaking 3"``.

    A missing level means 1. Returns None when any entry is unusable.
    """
    enchantments: PyList[Enchantment] = []
    for part in value.split(","):
        fields = part.split()
        if not fields:
            continue
        if len(fields) > 2:
            return None
        level = parse_int(fields[1], allow_negative=False) if len(fields) == 2 else 1
        if level is None or not 1 <= level <= MAX_ENCHANTMENT_LEVEL:
            return None
        enchantment_id = fields[0] if ":" in fields[0] else f"minecraft:{fields[0]}"
        enchantments.append(Enchantment(id=enchantment_id, level=level))
    return enchantments


def apply_enchantments(tag: Optional[ItemTag], enchantments: PyList[Enchantment]) -> Optional[ItemTag]:
    """Return ``tag`` with its enchantments replaced and every other field kept."""
    if tag is None:
        return ItemTag(enchantments=enchantments) if enchantments else None
    if tag.enchantments == enchantments:
        return tag
    updated = dataclasses.replace(tag, enchantments=enchantments)
    return None if updated.is_empty() else updated
