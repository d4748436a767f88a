"""Editable model of the presets stored in a ``hotbar.nbt`` file.

The model is deliberately small: a :class:`HotbarData` holds :class:`Preset`
objects, each preset holds :class:`Container` objects and each container holds
:class:`Item` stacks. Anything the model does not understand about an item is
kept in :attr:`ItemTag.extra` as nbtlib tags so it can be written back as-is.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List as PyList, Optional, Type

from nbtlib import Byte, Compound, File, Int, Short

# -----------------------------------------------------------------------------
# Format constants
# -----------------------------------------------------------------------------

AIR_ID = "minecraft:air"
BARREL_ID = "minecraft:barrel"
CHEST_ID = "minecraft:chest"
SHULKER_BOX_ID = "minecraft:shulker_box"

ROOT_SLOT_COUNT = 9
EDITABLE_ROOT_SLOT = 0
NBT_LORE_MARKER = '"(+NBT)"'

HOTBAR_CONTAINER = 0
MAIN_INVENTORY_CONTAINER = 1
EQUIPMENT_CONTAINER = 2

SHULKER_CAPACITY = 27
DOUBLE_CHEST_CAPACITY = 54
MAX_CONTAINER_SLOTS = DOUBLE_CHEST_CAPACITY

MIN_COUNT = 1
MAX_COUNT = 127


@dataclass
class Enchantment:
    id: str
    level: int
    # Numeric tag class the level was read as, reused when writing it back.
    level_type: Type[Any] = field(default=Short, repr=False, compare=False)


@dataclass
class ItemTag:
    """Metadata compound of an item."""

    enchantments: PyList[Enchantment] = field(default_factory=list)
    damage: Optional[int] = None
    # Raw JSON text, exactly as stored under display.Name.
    display_name: Optional[str] = None
    extra: Compound = field(default_factory=Compound)
    damage_type: Type[Any] = field(default=Int, repr=False, compare=False)

    def is_empty(self) -> bool:
        return not self.enchantments and self.damage is None and self.display_name is None and not self.extra


@dataclass
class Item:
    """One stack of items inside a container."""

    id: str
    count: int = 1
    slot: Optional[int] = None
    tag: Optional[ItemTag] = None
    count_type: Type[Any] = field(default=Byte, repr=False, compare=False)
    slot_type: Type[Any] = field(default=Byte, repr=False, compare=False)

    @property
    def position(self) -> int:
        return 0 if self.slot is None else self.slot


@dataclass
class Container:
    id: str
    name: Optional[str] = None
    items: PyList[Item] = field(default_factory=list)


@dataclass
class Preset:
    name: str
    slot: int = EDITABLE_ROOT_SLOT
    containers: PyList[Container] = field(default_factory=list)


@dataclass
class HotbarData:
    presets: PyList[Preset] = field(default_factory=list)


@dataclass
class Diagnostic:
    """A node that was skipped or looks suspicious."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class PresetFile:
    """Result of parsing a hotbar file.

    ``raw_tree`` is the untouched nbtlib file, root name and compression
    included. Keep it around: it is the tree every later save must be built
    against.
    """

    hotbar: HotbarData
    raw_tree: File
    diagnostics: PyList[Diagnostic] = field(default_factory=list)

    @property
    def root_name(self) -> str:
        return self.raw_tree.root_name

    @property
    def gzipped(self) -> bool:
        return bool(self.raw_tree.gzipped)


def container_capacity(container_id: str) -> int:
    if "shulker" in container_id:
        return SHULKER_CAPACITY
    return DOUBLE_CHEST_CAPACITY
