"""Slot-addressed editing of :class:`HotbarData`.

Container slots are local to one container. The inventory screen uses a flat
numbering instead:

* UI 0-8   -> hotbar container (0), slots 0-8
* UI 9-35  -> main inventory container (1), slots 0-26
* UI 36-40 -> armor and offhand container (2), slots 36-40

Every function mutates the given ``HotbarData`` in place.
"""
from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from typing import List as PyList, Optional, Tuple

from .errors import EditError
from .models import (
    CHEST_ID,
    EDITABLE_ROOT_SLOT,
    EQUIPMENT_CONTAINER,
    HOTBAR_CONTAINER,
    MAIN_INVENTORY_CONTAINER,
    MAX_CONTAINER_SLOTS,
    MAX_COUNT,
    MIN_COUNT,
    ROOT_SLOT_COUNT,
    Container,
    Diagnostic,
    HotbarData,
    Item,
    Preset,
    container_capacity,
)

logger = logging.getLogger(__name__)

HOTBAR_UI_SLOTS = range(0, 9)
MAIN_INVENTORY_UI_SLOTS = range(9, 36)
EQUIPMENT_UI_SLOTS = range(36, 41)
UI_SLOT_COUNT = 41

NEW_PRESET_NAME = "New Preset"
NEW_PRESET_CONTAINERS = 2


def ui_slot_to_container(ui_slot: int) -> Tuple[int, int]:
    """Translate a UI slot into ``(container_index, slot_index)``."""
    if ui_slot in HOTBAR_UI_SLOTS:
        return HOTBAR_CONTAINER, ui_slot
    if ui_slot in MAIN_INVENTORY_UI_SLOTS:
        return MAIN_INVENTORY_CONTAINER, ui_slot - MAIN_INVENTORY_UI_SLOTS.start
    if ui_slot in EQUIPMENT_UI_SLOTS:
        return EQUIPMENT_CONTAINER, ui_slot
    raise EditError(f"UI slot {ui_slot} is outside 0..{UI_SLOT_COUNT - 1}.")


def container_to_ui_slot(container_index: int, slot_index: int) -> Optional[int]:
    """Inverse of :func:`ui_slot_to_container`; None when the UI has no such slot."""
    if container_index == HOTBAR_CONTAINER and slot_index in HOTBAR_UI_SLOTS:
        return slot_index
    if container_index == MAIN_INVENTORY_CONTAINER and 0 <= slot_index < len(MAIN_INVENTORY_UI_SLOTS):
        return slot_index + MAIN_INVENTORY_UI_SLOTS.start
    if container_index == EQUIPMENT_CONTAINER and slot_index in EQUIPMENT_UI_SLOTS:
        return slot_index
    return None


def find_item(container: Container, slot_index: int) -> Optional[Item]:
    for item in container.items:
        if item.position == slot_index:
            return item
    return None


def ensure_container(preset: Preset, container_index: int) -> Container:
    while len(preset.containers) <= container_index:
        logger.debug("Adding empty container %d to preset %r", len(preset.containers), preset.name)
        preset.containers.append(Container(id=CHEST_ID))
    return preset.containers[container_index]


def get_preset(hotbar: HotbarData, preset_index: int) -> Preset:
    if not 0 <= preset_index < len(hotbar.presets):
        raise EditError(f"No preset at index {preset_index}; there are {len(hotbar.presets)}.")
    return hotbar.presets[preset_index]


def _check_editable(preset: Preset) -> None:
    if preset.slot != EDITABLE_ROOT_SLOT:
        raise EditError(f"Preset {preset.name!r} is stored in hotbar row {preset.slot + 1} and cannot be changed.")


def _check_bounds(container_index: int, slot_index: int, item: Optional[Item]) -> None:
    if container_index < 0:
        raise EditError(f"Container index must not be negative, got {container_index}.")
    if not 0 <= slot_index < MAX_CONTAINER_SLOTS:
        raise EditError(f"Slot must be between 0 and {MAX_CONTAINER_SLOTS - 1}, got {slot_index}.")
    if item is not None and not MIN_COUNT <= item.count <= MAX_COUNT:
        raise EditError(f"Count must be between {MIN_COUNT} and {MAX_COUNT}, got {item.count}.")


def set_item_at_slot(
    hotbar: HotbarData,
    preset_index: int,
    container_index: int,
    slot_index: int,
    item: Optional[Item],
) -> None:
    """Write ``item`` at a container slot, or clear the slot when it is None.

    Any items already claiming the slot are replaced by a single copy of
    ``item`` placed where the first of them was.
    """
    _check_bounds(container_index, slot_index, item)
    preset = get_preset(hotbar, preset_index)
    if item is None and container_index >= len(preset.containers):
        return

    container = ensure_container(preset, container_index)
    kept: PyList[Item] = []
    position = None
    for existing in container.items:
        if existing.position == slot_index:
            if position is None:
                position = len(kept)
            continue
        kept.append(existing)

    if item is not None:
        placed = dataclasses.replace(item, slot=slot_index)
        kept.insert(len(kept) if position is None else position, placed)
    container.items = kept


def delete_item_at_slot(hotbar: HotbarData, preset_index: int, container_index: int, slot_index: int) -> None:
    set_item_at_slot(hotbar, preset_index, container_index, slot_index, None)


def item_at_ui_slot(hotbar: HotbarData, preset_index: int, ui_slot: int) -> Optional[Item]:
    container_index, slot_index = ui_slot_to_container(ui_slot)
    preset = get_preset(hotbar, preset_index)
    if container_index >= len(preset.containers):
        return None
    return find_item(preset.containers[container_index], slot_index)


def set_item_at_ui_slot(hotbar: HotbarData, preset_index: int, ui_slot: int, item: Optional[Item]) -> None:
    container_index, slot_index = ui_slot_to_container(ui_slot)
    set_item_at_slot(hotbar, preset_index, container_index, slot_index, item)


def delete_item_at_ui_slot(hotbar: HotbarData, preset_index: int, ui_slot: int) -> None:
    set_item_at_ui_slot(hotbar, preset_index, ui_slot, None)


def move_item(hotbar: HotbarData, preset_index: int, from_ui_slot: int, to_ui_slot: int) -> None:
    """Move the item at one UI slot to another, swapping with whatever is there."""
    if from_ui_slot == to_ui_slot:
        return
    source = item_at_ui_slot(hotbar, preset_index, from_ui_slot)
    if source is None:
        return
    target = item_at_ui_slot(hotbar, preset_index, to_ui_slot)

    set_item_at_ui_slot(hotbar, preset_index, to_ui_slot, source)
    set_item_at_ui_slot(hotbar, preset_index, from_ui_slot, target)


# -----------------------------------------------------------------------------
# Presets
# -----------------------------------------------------------------------------


def add_preset(hotbar: HotbarData, name: str = NEW_PRESET_NAME, after: Optional[int] = None) -> int:
    """Insert an empty preset after the one at ``after`` (or at the end) and return its index."""
    if after is None:
        index = len(hotbar.presets)
    else:
        get_preset(hotbar, after)
        index = after + 1
    containers = [Container(id=CHEST_ID) for _ in range(NEW_PRESET_CONTAINERS)]
    hotbar.presets.insert(index, Preset(name=name, containers=containers))
    return index


def remove_preset(hotbar: HotbarData, preset_index: int) -> Preset:
    preset = get_preset(hotbar, preset_index)
    _check_editable(preset)
    del hotbar.presets[preset_index]
    return preset


def move_preset(hotbar: HotbarData, from_index: int, to_index: int) -> None:
    """Swap two presets. Their order is the order of the barrels in root slot 0."""
    source = get_preset(hotbar, from_index)
    target = get_preset(hotbar, to_index)
    if from_index == to_index:
        return
    _check_editable(source)
    _check_editable(target)
    hotbar.presets[from_index], hotbar.presets[to_index] = target, source


# -----------------------------------------------------------------------------
# Invariant checks
# -----------------------------------------------------------------------------


def check_hotbar(hotbar: HotbarData) -> PyList[Diagnostic]:
    """Report every item or preset that breaks the model's invariants."""
    problems: PyList[Diagnostic] = []
    for preset_index, preset in enumerate(hotbar.presets):
        preset_path = f"presets[{preset_index}]"
        if not 0 <= preset.slot < ROOT_SLOT_COUNT:
            problems.append(Diagnostic(preset_path, f"root slot {preset.slot} is outside 0..{ROOT_SLOT_COUNT - 1}"))
        for container_index, container in enumerate(preset.containers):
            path = f"{preset_path}.containers[{container_index}]"
            capacity = container_capacity(container.id)
            for item_index, item in enumerate(container.items):
                if item.count < MIN_COUNT:
                    problems.append(Diagnostic(f"{path}.items[{item_index}]", f"count {item.count} is below {MIN_COUNT}"))
                if not 0 <= item.position < capacity:
                    problems.append(
                        Diagnostic(
                            f"{path}.items[{item_index}]",
                            f"slot {item.position} does not fit a {capacity}-slot {container.id}",
                        )
                    )
            for slot, count in sorted(Counter(item.position for item in container.items).items()):
                if count > 1:
                    problems.append(Diagnostic(path, f"{count} items share slot {slot}"))
    return problems
