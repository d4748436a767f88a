"""Tests for the item projector."""

import logging

from nbtlib import Byte, Compound, Int, List as NbtList, Long, Short, String

from hotbar_presets.items import decode_item, encode_item, is_air
from hotbar_presets.models import Enchantment, Item, ItemTag

from nbt_samples import air, enchanted_sword, item


# =============================================================================
# Decoding
# =============================================================================

class TestDecodeItem:
    def test_plain_item(self):
        decoded = decode_item(item("minecraft:compass", slot=0))
        assert decoded == Item(id="minecraft:compass", count=1, slot=0, tag=None)

    def test_missing_id_decodes_to_empty_string(self):
        decoded = decode_item(Compound({"Count": Byte(3)}))
        assert decoded.id == ""
        assert decoded.count == 3

    def test_missing_count_defaults_to_one(self):
        decoded = decode_item(Compound({"id": String("minecraft:stone")}))
        assert decoded.count == 1
        assert decoded.slot is None

    def test_non_positive_count_defaults_to_one(self):
        assert decode_item(item("minecraft:stone", count=0)).count == 1
        assert decode_item(item("minecraft:stone", count=-4)).count == 1

    def test_count_of_wrong_type_defaults_to_one(self):
        node = Compound({"id": String("minecraft:stone"), "Count": String("64")})
        assert decode_item(node).count == 1

    def test_recognized_tag_fields(self):
        decoded = decode_item(enchanted_sword())
        assert decoded.tag.enchantments == [Enchantment(id="minecraft:sharpness", level=5)]
        assert decoded.tag.damage == 12
        assert decoded.tag.extra == {"CustomModelData": 7}

    def test_display_name_is_split_from_other_display_fields(self):
        lore = NbtList[String]([String('"Fast"')])
        tag = Compound({"display": Compound({"Name": String('{"text":"Pick"}'), "Lore": lore})})
        decoded = decode_item(item("minecraft:iron_pickaxe", tag=tag))
        assert decoded.tag.display_name == '{"text":"Pick"}'
        assert decoded.tag.extra["display"] == {"Lore": ['"Fast"']}

    def test_display_without_name_stays_in_extra(self):
        tag = Compound({"display": Compound({"color": Int(16711680)})})
        decoded = decode_item(item("minecraft:leather_boots", tag=tag))
        assert decoded.tag.display_name is None
        assert decoded.tag.extra["display"] == {"color": 16711680}

    def test_malformed_enchantments_are_kept_verbatim(self):
        odd = NbtList[Compound]([Compound({"id": String("minecraft:unbreaking")})])
        decoded = decode_item(item("minecraft:shears", tag=Compound({"Enchantments": odd})))
        assert decoded.tag.enchantments == []
        assert decoded.tag.extra["Enchantments"] == odd

    def test_unrecognized_enchantments_are_logged(self, caplog):
        odd = NbtList[Compound]([Compound({"id": String("minecraft:unbreaking")})])
        with caplog.at_level(logging.DEBUG, logger="hotbar_presets.items"):
            decode_item(item("minecraft:shears", tag=Compound({"Enchantments": odd})))
        assert "unrecognized enchantment list" in caplog.text

    def test_empty_tag_decodes_to_none(self):
        assert decode_item(item("minecraft:stone", tag=Compound())).tag is None

    def test_extra_does_not_alias_the_source_tree(self):
        potion = Compound({"Potion": String("minecraft:fire_resistance"), "Custom": Compound({"a": Int(1)})})
        node = item("minecraft:potion", tag=potion)
        decoded = decode_item(node)
        decoded.tag.extra["Custom"]["a"] = Int(2)
        assert node["tag"]["Custom"]["a"] == 1


# =============================================================================
# Encoding
# =============================================================================

class TestEncodeItem:
    def test_field_order(self):
        node = encode_item(Item(id="minecraft:bread", count=16, slot=8))
        assert list(node) == ["Slot", "id", "Count"]
        assert isinstance(node["Slot"], Byte)
        assert isinstance(node["Count"], Byte)

    def test_missing_slot_stays_missing(self):
        assert "Slot" not in encode_item(Item(id="minecraft:bread"))

    def test_slotless_item_round_trips(self):
        node = item("minecraft:compass", slot=None)
        assert encode_item(decode_item(node)) == node

    def test_numbers_are_written_with_their_stored_types(self):
        node = item("minecraft:stone", slot=None)
        node["Slot"] = Short(2)
        node["Count"] = Int(300)
        node["tag"] = Compound(
            {
                "Enchantments": NbtList[Compound]([Compound({"id": String("minecraft:unbreaking"), "lvl": Int(40000)})]),
                "Damage": Long(1),
            }
        )
        encoded = encode_item(decode_item(node))
        assert encoded == node
        assert isinstance(encoded["Slot"], Short)
        assert isinstance(encoded["Count"], Int)
        assert isinstance(encoded["tag"]["Enchantments"][0]["lvl"], Int)
        assert isinstance(encoded["tag"]["Damage"], Long)

    def test_new_items_use_the_usual_types(self):
        node = encode_item(Item(id="minecraft:bread", count=3, slot=1))
        assert isinstance(node["Slot"], Byte)
        assert isinstance(node["Count"], Byte)

    def test_empty_tag_is_omitted(self):
        assert "tag" not in encode_item(Item(id="minecraft:bread", tag=ItemTag()))

    def test_tag_merges_recognized_fields_and_extra(self):
        tag = ItemTag(
            enchantments=[Enchantment(id="minecraft:efficiency", level=3)],
            damage=0,
            display_name='{"text":"Axe"}',
            extra=Compound({"display": Compound({"Lore": NbtList[String]([String('"x"')])}), "Unbreakable": Byte(1)}),
        )
        node = encode_item(Item(id="minecraft:iron_axe", slot=2, tag=tag))["tag"]
        assert node["Enchantments"] == [{"id": "minecraft:efficiency", "lvl": 3}]
        assert isinstance(node["Enchantments"][0]["lvl"], Short)
        assert isinstance(node["Damage"], Int)
        assert node["display"] == {"Lore": ['"x"'], "Name": '{"text":"Axe"}'}
        assert node["Unbreakable"] == 1

    def test_display_name_does_not_modify_extra(self):
        extra = Compound({"display": Compound({"Lore": NbtList[String]([String('"x"')])})})
        encode_item(Item(id="minecraft:stick", tag=ItemTag(display_name='"Wand"', extra=extra)))
        assert "Name" not in extra["display"]

    def test_encoding_a_decoded_item_gives_the_same_compound(self):
        node = enchanted_sword()
        assert encode_item(decode_item(node)) == node


class TestIsAir:
    def test_air_compound(self):
        assert is_air(air())

    def test_air_id(self):
        assert is_air("minecraft:air")

    def test_other_items(self):
        assert not is_air(item("minecraft:stone"))
        assert not is_air(Compound())
