import pytest
from nbtlib import Compound

from hotbar_presets.nbtio import encode_tree
from nbt_samples import air, barrel, command_block, container, enchanted_sword, hotbar_root, item, nether_enter_barrel


@pytest.fixture
def nether_root() -> Compound:
    return hotbar_root([nether_enter_barrel()])


@pytest.fixture
def protected_root() -> Compound:
    """Slot 0 holds the Nether Enter barrel, an air entry and a command block."""
    return hotbar_root([nether_enter_barrel(), air(), command_block()])


@pytest.fixture
def mixed_root() -> Compound:
    """A busier file: two barrels around a command block, and a preset in row 4."""
    speedrun = barrel(
        "Speedrun",
        [
            container("minecraft:shulker_box", 0, [enchanted_sword(), item("minecraft:bread", count=16, slot=8)]),
            container("minecraft:shulker_box", 1, [item("minecraft:oak_planks", count=64, slot=3)]),
        ],
    )
    row_four = barrel("Row Four", [container("minecraft:chest", 0, [item("minecraft:stone", slot=2)])])
    return hotbar_root([nether_enter_barrel(), command_block(), speedrun], slot3=[row_four])


@pytest.fixture
def nether_bytes(nether_root) -> bytes:
    return encode_tree(nether_root)


@pytest.fixture
def protected_bytes(protected_root) -> bytes:
    return encode_tree(protected_root)


@pytest.fixture
def mixed_bytes(mixed_root) -> bytes:
    return encode_tree(mixed_root)
