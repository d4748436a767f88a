"""Tests for the inventory screen helpers and JSON text handling."""

import pytest
from nbtlib import Byte, Compound

from hotbar_presets.editing import UI_SLOT_COUNT
from hotbar_presets.layout import (
    EQUIPMENT_SLOTS,
    INVENTORY_GRID,
    apply_enchantments,
    format_enchantments,
    format_slot_text,
    parse_enchantments,
    parse_int,
    slot_label,
)
from hotbar_presets.models import Enchantment, Item, ItemTag
from hotbar_presets.text import unwrap_json_text, wrap_json_text


class TestLayout:
    def test_every_ui_slot_has_one_button(self):
        shown = [slot for row in INVENTORY_GRID for slot in row] + EQUIPMENT_SLOTS
        assert sorted(shown) == list(range(UI_SLOT_COUNT))

    def test_hotbar_row_is_last(self):
        assert INVENTORY_GRID[-1] == list(range(9))

    def test_slot_labels(self):
        assert slot_label(39) == "Helmet"
        assert slot_label(40) == "Offhand"
        assert slot_label(12) == "Slot 12"


class TestFormatSlotText:
    def test_empty(self):
        assert format_slot_text(3, None) == "Slot 3\nEmpty"

    def test_empty_identifier_counts_as_empty(self):
        assert format_slot_text(3, Item(id="")) == "Slot 3\nEmpty"

    def test_item(self):
        assert format_slot_text(0, Item(id="minecraft:compass", slot=0)) == "Slot 0\ncompass ×1"

    def test_enchanted_item_is_marked(self):
        tag = ItemTag(enchantments=[Enchantment(id="minecraft:sharpness", level=5)])
        assert format_slot_text(1, Item(id="minecraft:iron_sword", tag=tag)) == "Slot 1\niron_sword * ×1"


class TestParseInt:
    @pytest.mark.parametrize("text, expected", [("12", 12), ("0x10", 16), ("-3", -3), ("", None), ("abc", None)])
    def test_values(self, text, expected):
        assert parse_int(text) == expected

    def test_negative_rejected(self):
        assert parse_int("-3", allow_negative=False) is None


class TestEnchantmentText:
    def test_format(self):
        enchantments = [Enchantment("minecraft:sharpness", 5), Enchantment("minecraft:unbreaking", 3)]
        assert format_enchantments(enchantments) == "minecraft:sharpness 5, minecraft:unbreaking 3"

    def test_parse(self):
        assert parse_enchantments("minecraft:sharpness 5, unbreaking") == [
            Enchantment("minecraft:sharpness", 5),
            Enchantment("minecraft:unbreaking", 1),
        ]

    def test_parse_blank(self):
        assert parse_enchantments("  ") == []

    @pytest.mark.parametrize("text", ["sharpness five", "sharpness 0", "sharpness 256", "sharpness 1 2"])
    def test_parse_rejects(self, text):
        assert parse_enchantments(text) is None


class TestApplyEnchantments:
    def test_no_tag_and_no_enchantments(self):
        assert apply_enchantments(None, []) is None

    def test_new_tag(self):
        tag = apply_enchantments(None, [Enchantment("minecraft:mending", 1)])
        assert tag == ItemTag(enchantments=[Enchantment("minecraft:mending", 1)])

    def test_other_fields_are_kept(self):
        tag = ItemTag(damage=4, extra=Compound({"Unbreakable": Byte(1)}))
        updated = apply_enchantments(tag, [Enchantment("minecraft:mending", 1)])
        assert updated.damage == 4
        assert updated.extra == {"Unbreakable": 1}
        assert tag.enchantments == []

    def test_unchanged_enchantments_keep_the_tag(self):
        tag = ItemTag(enchantments=[Enchantment("minecraft:mending", 1)])
        assert apply_enchantments(tag, [Enchantment("minecraft:mending", 1)]) is tag

    def test_clearing_the_only_field_drops_the_tag(self):
        tag = ItemTag(enchantments=[Enchantment("minecraft:mending", 1)])
        assert apply_enchantments(tag, []) is None


class TestJsonText:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('{"text":"Nether Enter"}', "Nether Enter"),
            ('"Quoted"', "Quoted"),
            ('{"text":"","extra":[{"text":"Blind "},"Travel"]}', "Blind Travel"),
            ('{"text":""}', ""),
            ("Plain name", "Plain name"),
            ("123", "123"),
            ('{"translate":"block.minecraft.barrel"}', '{"translate":"block.minecraft.barrel"}'),
        ],
    )
    def test_unwrap(self, raw, expected):
        assert unwrap_json_text(raw) == expected

    def test_wrap_then_unwrap(self):
        for name in ["Nether Enter", "", "Ünïcödé", 'with "quotes"']:
            assert unwrap_json_text(wrap_json_text(name)) == name
