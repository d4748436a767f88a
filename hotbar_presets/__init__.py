"""Read, edit and write the barrel presets stored in Minecraft's ``hotbar.nbt``."""
from .codec import build_preset_file, load_preset_file, parse_preset_file, save_preset_file
from .editing import (
    add_preset,
    check_hotbar,
    delete_item_at_slot,
    item_at_ui_slot,
    move_item,
    move_preset,
    remove_preset,
    set_item_at_slot,
    ui_slot_to_container,
)
from .errors import DecodeError, EditError, PresetCodecError
from .models import Container, Diagnostic, Enchantment, HotbarData, Item, ItemTag, Preset, PresetFile

__all__ = [
    "Container",
    "DecodeError",
    "Diagnostic",
    "EditError",
    "Enchantment",
    "HotbarData",
    "Item",
    "ItemTag",
    "Preset",
    "PresetCodecError",
    "PresetFile",
    "add_preset",
    "build_preset_file",
    "check_hotbar",
    "delete_item_at_slot",
    "item_at_ui_slot",
    "load_preset_file",
    "move_item",
    "move_preset",
    "parse_preset_file",
    "remove_preset",
    "save_preset_file",
    "set_item_at_slot",
    "ui_slot_to_container",
]
