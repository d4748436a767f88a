"""Conversion between container item compounds and :class:`Container` values.

A container is stored as an *item* (a chest or shulker box in item form)
whose ``tag.BlockEntityTag.Items`` list holds the actual stacks.
"""
from __future__ import annotations

import logging
from typing import List as PyList, Optional

from nbtlib import Byte, Compound, List as NbtList, String

from .items import decode_item, encode_item, is_air, read_string
from .models import CHEST_ID, NBT_LORE_MARKER, SHULKER_BOX_ID, Container, Diagnostic, Item
from .text import unwrap_json_text, wrap_json_text

logger = logging.getLogger(__name__)


def block_entity_items(node: Compound) -> Optional[NbtList]:
    """Return ``tag.BlockEntityTag.Items`` when the node carries one."""
    tag = node.get("tag")
    if not isinstance(tag, Compound):
        return None
    block_entity = tag.get("BlockEntityTag")
    if not isinstance(block_entity, Compound):
        return None
    items = block_entity.get("Items")
    if not isinstance(items, NbtList):
        return None
    return items


def display_name(node: Compound) -> Optional[str]:
    tag = node.get("tag")
    if not isinstance(tag, Compound):
        return None
    display = tag.get("display")
    if not isinstance(display, Compound):
        return None
    return read_string(display.get("Name"))


def decode_container(
    node: Compound,
    *,
    path: str = "",
    diagnostics: Optional[PyList[Diagnostic]] = None,
) -> Optional[Container]:
    """Project a container compound, or return None for a plain item."""
    container_id = read_string(node.get("id"))
    if not container_id:
        _skip(diagnostics, path, "container entry without an id")
        return None
    nested = block_entity_items(node)
    if nested is None:
        _skip(diagnostics, path, f"{container_id} holds no item list")
        return None

    items: PyList[Item] = []
    for index, entry in enumerate(nested):
        if not isinstance(entry, Compound):
            _skip(diagnostics, f"{path}.Items[{index}]", "item entry is not a compound")
            continue
        if is_air(entry):
            continue
        items.append(decode_item(entry))

    raw_name = display_name(node)
    name = unwrap_json_text(raw_name) if raw_name is not None else None
    return Container(id=container_id, name=name, items=items)


def encode_container(container: Container, container_index: int) -> Compound:
    block_entity = Compound()
    block_entity["Items"] = NbtList[Compound]([encode_item(item) for item in container.items])
    block_entity["id"] = String(block_entity_id(container.id))

    display = Compound()
    display["Lore"] = NbtList[String]([String(NBT_LORE_MARKER)])
    if container.name is not None:
        display["Name"] = String(wrap_json_text(container.name))

    node = Compound()
    node["Slot"] = Byte(container_index)
    node["id"] = String(container.id)
    node["Count"] = Byte(1)
    node["tag"] = Compound({"BlockEntityTag": block_entity, "display": display})
    return node


def block_entity_id(container_id: str) -> str:
    if "shulker" in container_id:
        return SHULKER_BOX_ID
    return CHEST_ID


def _skip(diagnostics: Optional[PyList[Diagnostic]], path: str, message: str) -> None:
    logger.debug("Skipping %s: %s", path or "container", message)
    if diagnostics is not None:
        diagnostics.append(Diagnostic(path=path, message=message))
