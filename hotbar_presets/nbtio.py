"""Reading and writing whole NBT files with nbtlib."""
from __future__ import annotations

import gzip
import io
import os
import struct
import zlib
from typing import Union

import nbtlib
from nbtlib import Compound, File

from .errors import DecodeError

PathLike = Union[str, "os.PathLike[str]"]

GZIP_MAGIC = b"\x1f\x8b"

# Everything nbtlib lets escape from a malformed payload.
PARSE_ERRORS = (struct.error, KeyError, IndexError, TypeError, ValueError, EOFError, zlib.error)


def is_gzipped(data: bytes) -> bool:
    return data[:2] == GZIP_MAGIC


def decode_tree(data: bytes) -> File:
    """Parse ``data`` into an nbtlib :class:`~nbtlib.File`.

    The file keeps its ``root_name`` and ``gzipped`` flag so a later save
    writes the same framing back. Raises :class:`DecodeError` for anything
    that is not a complete NBT file whose root tag is a compound.
    """
    fileobj = io.BytesIO(data)
    if is_gzipped(data):
        fileobj = gzip.GzipFile(fileobj=fileobj)
    try:
        return File.from_fileobj(fileobj)
    except (OSError,) + PARSE_ERRORS as exc:
        raise DecodeError(f"Invalid NBT data: {exc}") from exc


def encode_tree(root: Compound, root_name: str = "", *, gzipped: bool = False) -> bytes:
    return tree_bytes(File(root, root_name=root_name, gzipped=gzipped))


def tree_bytes(tree: File) -> bytes:
    buffer = io.BytesIO()
    if tree.gzipped:
        with gzip.GzipFile(fileobj=buffer, mode="wb", mtime=0) as fileobj:
            tree.write(fileobj)
    else:
        tree.write(buffer)
    return buffer.getvalue()


def load_tree(path: PathLike) -> File:
    """Load a file from disk; I/O errors propagate unchanged."""
    try:
        return nbtlib.load(path)
    except PARSE_ERRORS as exc:
        raise DecodeError(f"Invalid NBT data in {path}: {exc}") from exc


def save_tree(tree: File, path: PathLike) -> None:
    tree.save(path)
