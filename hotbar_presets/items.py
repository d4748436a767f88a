"""Conversion between item compounds and :class:`Item` values."""
from __future__ import annotations

import copy
import logging
from typing import Any, List as PyList, Optional

from nbtlib import Byte, Compound, Int, List as NbtList, Long, Short, String

from .models import AIR_ID, Enchantment, Item, ItemTag

logger = logging.getLogger(__name__)

NUMERIC_TYPES = (Byte, Short, Int, Long)

ENCHANTMENTS_KEY = "Enchantments"
DAMAGE_KEY = "Damage"
DISPLAY_KEY = "display"
NAME_KEY = "Name"


def is_air(value: Any) -> bool:
    """Return True for the air id or for a compound whose id is air."""
    if isinstance(value, Compound):
        value = value.get("id")
    return isinstance(value, str) and value == AIR_ID


def read_int(node: Any) -> Optional[int]:
    if isinstance(node, NUMERIC_TYPES):
        return int(node)
    return None


def read_string(node: Any) -> Optional[str]:
    if isinstance(node, String):
        return str(node)
    return None


# -----------------------------------------------------------------------------
# Decoding
# -----------------------------------------------------------------------------


def decode_item(node: Compound) -> Item:
    """Project an item compound.

    Never raises on a well-typed compound: a missing id becomes ``""`` and a
    missing or unusable count becomes 1.
    """
    item_id = read_string(node.get("id")) or ""
    count_node = node.get("Count")
    count = read_int(count_node)
    if count is None or count < 1:
        count = 1
    slot_node = node.get("Slot")
    slot = read_int(slot_node)

    # Numbers keep the tag class they were stored with so they fit on save.
    count_type = type(count_node) if isinstance(count_node, NUMERIC_TYPES) else Byte
    slot_type = type(slot_node) if slot is not None else Byte

    tag = None
    tag_node = node.get("tag")
    if isinstance(tag_node, Compound):
        tag = decode_item_tag(tag_node)
        if tag.is_empty():
            tag = None
    return Item(id=item_id, count=count, slot=slot, tag=tag, count_type=count_type, slot_type=slot_type)


def decode_item_tag(tag_node: Compound) -> ItemTag:
    tag = ItemTag()
    for key, value in tag_node.items():
        if key == ENCHANTMENTS_KEY:
            enchantments = _decode_enchantments(value)
            if enchantments is not None:
                tag.enchantments = enchantments
                continue
            logger.debug("Keeping unrecognized enchantment list as-is: %s", value)
        elif key == DAMAGE_KEY:
            damage = read_int(value)
            if damage is not None:
                tag.damage = damage
                tag.damage_type = type(value)
                continue
        elif key == DISPLAY_KEY and isinstance(value, Compound):
            name = read_string(value.get(NAME_KEY))
            if name is not None:
                tag.display_name = name
                rest = Compound({k: copy.deepcopy(v) for k, v in value.items() if k != NAME_KEY})
                if rest:
                    tag.extra[DISPLAY_KEY] = rest
                continue
        tag.extra[key] = copy.deepcopy(value)
    return tag


def _decode_enchantments(value: Any) -> Optional[PyList[Enchantment]]:
    # All or nothing: a list with a single odd entry stays untouched in extra.
    if not isinstance(value, NbtList) or not value:
        return None
    enchantments: PyList[Enchantment] = []
    for entry in value:
        if not isinstance(entry, Compound) or set(entry) != {"id", "lvl"}:
            return None
        enchantment_id = read_string(entry.get("id"))
        level = read_int(entry.get("lvl"))
        if enchantment_id is None or level is None:
            return None
        enchantments.append(Enchantment(id=enchantment_id, level=level, level_type=type(entry["lvl"])))
    return enchantments


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------


def encode_item(item: Item) -> Compound:
    node = Compound()
    if item.slot is not None:
        node["Slot"] = item.slot_type(item.slot)
    node["id"] = String(item.id)
    node["Count"] = item.count_type(item.count)
    if item.tag is not None and not item.tag.is_empty():
        node["tag"] = encode_item_tag(item.tag)
    return node


def encode_item_tag(tag: ItemTag) -> Compound:
    node = Compound()
    if tag.enchantments:
        node[ENCHANTMENTS_KEY] = NbtList[Compound](
            [Compound({"id": String(e.id), "lvl": e.level_type(e.level)}) for e in tag.enchantments]
        )
    if tag.damage is not None:
        node[DAMAGE_KEY] = tag.damage_type(tag.damage)

    display = tag.extra.get(DISPLAY_KEY)
    if tag.display_name is not None:
        display = Compound(display) if isinstance(display, Compound) else Compound()
        display[NAME_KEY] = String(tag.display_name)
    if display is not None:
        node[DISPLAY_KEY] = display

    for key, value in tag.extra.items():
        if key not in node:
            node[key] = value
    return node
