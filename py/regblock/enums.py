from __future__ import annotations

from enum import Enum

__all__ = [ 'Endianness', 'MapMode', 'AccessMode', 'Operation', 'OverlapKind', ]


class Endianness(Enum):
    Default = 0
    Big = 1
    Little  = 2


class MapMode(Enum):
    Read = 0
    Write = 1
    ReadWrite = 2


class AccessMode(Enum):
    RW = 'RW'
    RO = 'RO'
    WO = 'WO'
    Clear = 'Clear'


class Operation(Enum):
    Read = 'read'
    Write = 'write'
    Clear = 'clear'


class OverlapKind(Enum):
    RwRwOverlap = 'RW field overlaps another RW field'
    RwOtherOverlap = 'RW field may not share an address with any other field'
    WoWoOverlap = 'WO field overlaps another WO field'
    WoClearOverlap = 'WO field overlaps a Clear field'
    ClearClearOverlap = 'Clear field overlaps another Clear field'

    @property
    def rule(self) -> str:
        return self.value
