from __future__ import annotations

import mmap
import os
import weakref
from typing import BinaryIO

from .enums import Endianness, MapMode
from .target import Target

__all__ = [ 'MMapTarget', ]


class MMapTarget(Target):
    """Target over a shared mapping of a file, usually /dev/mem.

    The mapping starts at the page containing ``offset``; addresses passed
    to read() and write() are absolute file offsets.
    """

    def __init__(self, file: str | BinaryIO,
                 offset: int, length: int,
                 data_endianness: Endianness = Endianness.Default, data_size: int = 4,
                 mode: MapMode = MapMode.ReadWrite) -> None:
        super().__init__(offset, length, data_endianness, data_size)

        self.mode = mode

        oflag, prot = {
            MapMode.Read: (os.O_RDONLY, mmap.PROT_READ),
            MapMode.Write: (os.O_WRONLY, mmap.PROT_WRITE),
            MapMode.ReadWrite: (os.O_RDWR, mmap.PROT_READ | mmap.PROT_WRITE),
        }[mode]

        if isinstance(file, str):
            fd = os.open(file, oflag | os.O_SYNC)
        else:
            # mmap will (apparently?) close its fd, so duplicate it first
            fd = os.dup(file.fileno())

        page_offset = offset & ~(mmap.ALLOCATIONGRANULARITY - 1)
        self._buffer_offset = offset - page_offset

        try:
            self._map = mmap.mmap(fd, length + self._buffer_offset, mmap.MAP_SHARED, prot,
                                  offset=page_offset)
        finally:
            os.close(fd)

        weakref.finalize(self, MMapTarget.cleanup, self._map)

    @staticmethod
    def cleanup(m):
        # It is ok to call close() multiple times
        m.close()

    @property
    def _buffer(self):
        return self._map

    def close(self):
        self._map.close()

    def _check_readable(self):
        if self.mode == MapMode.Write:
            raise RuntimeError('Target is mapped write-only')

    def _check_writable(self):
        if self.mode == MapMode.Read:
            raise RuntimeError('Target is mapped read-only')
