"""Exceptions raised by the preset codec."""
from __future__ import annotations


class PresetCodecError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(PresetCodecError):
    """The input bytes are not a readable NBT file."""


class EditError(PresetCodecError, ValueError):
    """A slot-addressed edit was asked to write outside the allowed bounds."""
