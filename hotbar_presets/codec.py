"""Bytes in, presets out, and back again."""
from __future__ import annotations

import logging
from typing import List as PyList, Optional

from nbtlib import Compound, File

from .models import Diagnostic, HotbarData, PresetFile
from .nbtio import PathLike, decode_tree, load_tree, save_tree, tree_bytes
from .presets import encode_presets, extract_presets

logger = logging.getLogger(__name__)


def parse_preset_file(data: bytes) -> PresetFile:
    """Decode a hotbar file.

    Raises :class:`~hotbar_presets.errors.DecodeError` when the bytes are not
    NBT. Entries that do not look like presets never fail the parse; they are
    listed in ``PresetFile.diagnostics`` instead.
    """
    return _preset_file(decode_tree(data))


def _preset_file(tree: File) -> PresetFile:
    diagnostics: PyList[Diagnostic] = []
    hotbar = extract_presets(tree, diagnostics)
    logger.info("Loaded %d preset(s), skipped %d node(s)", len(hotbar.presets), len(diagnostics))
    return PresetFile(hotbar=hotbar, raw_tree=tree, diagnostics=diagnostics)


def build_tree(
    hotbar: HotbarData,
    raw_tree: Optional[Compound] = None,
    *,
    root_name: Optional[str] = None,
    gzipped: Optional[bool] = None,
    diagnostics: Optional[PyList[Diagnostic]] = None,
) -> File:
    """Encode ``hotbar`` into a new :class:`~nbtlib.File`.

    Root name and compression default to those of ``raw_tree`` when it is an
    nbtlib file, and to an unnamed, uncompressed file otherwise.
    """
    root = encode_presets(hotbar, raw_tree, diagnostics)
    if isinstance(raw_tree, File):
        root_name = raw_tree.root_name if root_name is None else root_name
        gzipped = bool(raw_tree.gzipped) if gzipped is None else gzipped
    return File(root, root_name=root_name or "", gzipped=bool(gzipped))


def build_preset_file(
    hotbar: HotbarData,
    raw_tree: Optional[Compound] = None,
    *,
    root_name: Optional[str] = None,
    gzipped: Optional[bool] = None,
    diagnostics: Optional[PyList[Diagnostic]] = None,
) -> bytes:
    """Encode ``hotbar`` into the tree it was read from.

    Pass the ``raw_tree`` of the latest :func:`parse_preset_file` call, not a
    tree decoded from an earlier build.
    """
    return tree_bytes(build_tree(hotbar, raw_tree, root_name=root_name, gzipped=gzipped, diagnostics=diagnostics))


def load_preset_file(path: PathLike) -> PresetFile:
    return _preset_file(load_tree(path))


def save_preset_file(
    path: PathLike,
    hotbar: HotbarData,
    raw_tree: Optional[Compound] = None,
    *,
    root_name: Optional[str] = None,
    gzipped: Optional[bool] = None,
    diagnostics: Optional[PyList[Diagnostic]] = None,
) -> None:
    tree = build_tree(hotbar, raw_tree, root_name=root_name, gzipped=gzipped, diagnostics=diagnostics)
    save_tree(tree, path)
    logger.info("Saved %d preset(s) to %s", len(hotbar.presets), path)
