"""Finding presets in a hotbar tree and writing them back.

The root compound of ``hotbar.nbt`` maps ``"0"`` .. ``"8"`` to lists of item
compounds. A barrel whose block entity holds container items is a preset;
every other non-air entry is protected and must survive a save unchanged.
Only root slot 0 is ever rebuilt.
"""
from __future__ import annotations

import enum
import logging
from collections import Counter, defaultdict
from typing import Dict, Iterator, List as PyList, Optional, Tuple

from nbtlib import Byte, Compound, Int, List as NbtList, String

from .containers import block_entity_items, decode_container, display_name, encode_container
from .items import is_air, read_string
from .models import (
    AIR_ID,
    BARREL_ID,
    EDITABLE_ROOT_SLOT,
    NBT_LORE_MARKER,
    ROOT_SLOT_COUNT,
    Container,
    Diagnostic,
    HotbarData,
    Preset,
)
from .text import unwrap_json_text, wrap_json_text

logger = logging.getLogger(__name__)


class EntryKind(enum.Enum):
    EDITABLE = "editable"
    PROTECTED = "protected"
    EMPTY = "empty"


def root_key(slot: int) -> str:
    return str(slot)


def iter_root_entries(root: Compound, slot: int) -> Iterator[Tuple[int, Compound]]:
    """Yield ``(position, entry)`` for every compound in a root slot list."""
    entries = root.get(root_key(slot))
    if not isinstance(entries, NbtList):
        return
    for position, entry in enumerate(entries):
        if isinstance(entry, Compound):
            yield position, entry


# -----------------------------------------------------------------------------
# Extraction
# -----------------------------------------------------------------------------


def decode_preset(
    entry: Compound,
    slot: int,
    *,
    path: str = "",
    diagnostics: Optional[PyList[Diagnostic]] = None,
) -> Optional[Preset]:
    """Project one barrel entry, or return None when it is not a preset."""
    if read_string(entry.get("id")) != BARREL_ID:
        return None
    tag = entry.get("tag")
    if not isinstance(tag, Compound) or not isinstance(tag.get("BlockEntityTag"), Compound):
        _skip(diagnostics, path, "barrel without a block entity")
        return None

    nested = block_entity_items(entry)
    containers: PyList[Container] = []
    for index, node in enumerate(nested if nested is not None else ()):
        if not isinstance(node, Compound):
            _skip(diagnostics, f"{path}.Items[{index}]", "entry is not a compound")
            continue
        container = decode_container(node, path=f"{path}.Items[{index}]", diagnostics=diagnostics)
        if container is not None:
            containers.append(container)

    if not containers:
        _skip(diagnostics, path, "barrel holds no containers")
        return None

    raw_name = display_name(entry)
    name = unwrap_json_text(raw_name) if raw_name else f"Preset {slot + 1}"
    return Preset(name=name, slot=slot, containers=containers)


def classify_entry(entry: Compound, slot: int = EDITABLE_ROOT_SLOT) -> EntryKind:
    if is_air(entry):
        return EntryKind.EMPTY
    if decode_preset(entry, slot) is not None:
        return EntryKind.EDITABLE
    return EntryKind.PROTECTED


def extract_presets(root: Compound, diagnostics: Optional[PyList[Diagnostic]] = None) -> HotbarData:
    """Collect every preset stored in the nine root slots."""
    presets: PyList[Preset] = []
    for slot in range(ROOT_SLOT_COUNT):
        entries = root.get(root_key(slot))
        if entries is None:
            continue
        if not isinstance(entries, NbtList):
            _skip(diagnostics, f"[{slot}]", "root slot is not a list")
            continue
        for position, entry in enumerate(entries):
            path = f"[{slot}][{position}]"
            if not isinstance(entry, Compound):
                _skip(diagnostics, path, "root entry is not a compound")
                continue
            if is_air(entry):
                continue
            if read_string(entry.get("id")) != BARREL_ID:
                logger.debug("Keeping protected entry %s (%s)", path, entry.get("id"))
                continue
            preset = decode_preset(entry, slot, path=path, diagnostics=diagnostics)
            if preset is not None:
                presets.append(preset)
    return HotbarData(presets=presets)


# -----------------------------------------------------------------------------
# Re-encoding
# -----------------------------------------------------------------------------


def encode_preset(preset: Preset) -> Compound:
    name = String(wrap_json_text(preset.name))

    block_entity = Compound()
    block_entity["Items"] = NbtList[Compound](
        [encode_container(container, index) for index, container in enumerate(preset.containers)]
    )
    block_entity["id"] = String(BARREL_ID)
    block_entity["CustomName"] = name

    display = Compound()
    display["Lore"] = NbtList[String]([String(NBT_LORE_MARKER)])
    display["Name"] = name

    tag = Compound()
    tag["RepairCost"] = Int(0)
    tag["BlockEntityTag"] = block_entity
    tag["display"] = display

    entry = Compound()
    entry["id"] = String(BARREL_ID)
    entry["Count"] = Byte(1)
    entry["tag"] = tag
    return entry


def air_placeholder() -> Compound:
    return Compound({"id": String(AIR_ID), "Count": Byte(1), "tag": Compound({"Charged": Byte(0)})})


def empty_root_slot() -> NbtList:
    return NbtList[Compound]([air_placeholder() for _ in range(ROOT_SLOT_COUNT)])


def protected_entries(root: Compound, slot: int = EDITABLE_ROOT_SLOT) -> PyList[Compound]:
    return [entry for _, entry in iter_root_entries(root, slot) if classify_entry(entry, slot) is EntryKind.PROTECTED]


def encode_presets(
    hotbar: HotbarData,
    raw_tree: Optional[Compound] = None,
    diagnostics: Optional[PyList[Diagnostic]] = None,
) -> Compound:
    """Build the root compound to save.

    ``raw_tree`` must be the tree of the most recent parse; it is not
    modified. Without one, every root slot is written from scratch.
    """
    by_slot: Dict[int, PyList[Preset]] = defaultdict(list)
    for preset in hotbar.presets:
        by_slot[preset.slot].append(preset)
    for index, preset in enumerate(hotbar.presets):
        _check_slot_collisions(preset, f"presets[{index}]", diagnostics)
    for slot in sorted(slot for slot in by_slot if not 0 <= slot < ROOT_SLOT_COUNT):
        _warn(diagnostics, f"[{slot}]", f"preset slot {slot} is outside 0..{ROOT_SLOT_COUNT - 1} and was not saved")

    if raw_tree is None:
        root = Compound()
        for slot in range(ROOT_SLOT_COUNT):
            built = [encode_preset(preset) for preset in by_slot.get(slot, ())]
            root[root_key(slot)] = NbtList[Compound](built) if built else empty_root_slot()
        return root

    _check_readonly_slots(by_slot, raw_tree, diagnostics)

    entries = [encode_preset(preset) for preset in by_slot.get(EDITABLE_ROOT_SLOT, ())]
    entries.extend(protected_entries(raw_tree, EDITABLE_ROOT_SLOT))

    root = Compound(raw_tree)
    root[root_key(EDITABLE_ROOT_SLOT)] = NbtList[Compound](entries) if entries else empty_root_slot()
    return root


def _check_slot_collisions(preset: Preset, path: str, diagnostics: Optional[PyList[Diagnostic]]) -> None:
    for container_index, container in enumerate(preset.containers):
        counts = Counter(item.position for item in container.items)
        for slot, count in sorted(counts.items()):
            if count < 2:
                continue
            _warn(
                diagnostics,
                f"{path}.containers[{container_index}]",
                f"{count} items share slot {slot} in {container.id}; the last one wins",
            )


def _check_readonly_slots(
    by_slot: Dict[int, PyList[Preset]],
    raw_tree: Compound,
    diagnostics: Optional[PyList[Diagnostic]],
) -> None:
    original = extract_presets(raw_tree)
    for slot in range(ROOT_SLOT_COUNT):
        if slot == EDITABLE_ROOT_SLOT:
            continue
        current = by_slot.get(slot, [])
        stored = [preset for preset in original.presets if preset.slot == slot]
        if current == stored:
            continue
        _warn(diagnostics, f"[{slot}]", "edits to presets outside root slot 0 are not saved")


def _warn(diagnostics: Optional[PyList[Diagnostic]], path: str, message: str) -> None:
    logger.warning("%s: %s", path, message)
    if diagnostics is not None:
        diagnostics.append(Diagnostic(path=path, message=message))


def _skip(diagnostics: Optional[PyList[Diagnostic]], path: str, message: str) -> None:
    logger.debug("Skipping %s: %s", path or "entry", message)
    if diagnostics is not None:
        diagnostics.append(Diagnostic(path=path, message=message))
