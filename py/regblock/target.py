from __future__ import annotations

import sys
from abc import ABC, abstractmethod

from .enums import Endianness

__all__ = [
    'Target', 'MemoryTarget',
]


class Target(ABC):
    """A window [origin, origin + length) of addressable memory.

    Subclasses provide the backing buffer; ``_buffer_offset`` is the
    position of ``origin`` inside it. Reads and writes are single slice
    accesses of ``data_size`` bytes.
    """

    def __init__(self, origin: int, length: int,
                 data_endianness: Endianness = Endianness.Default, data_size: int = 4) -> None:
        if length <= 0:
            raise ValueError(f'Length must be positive, got {length}')
        if data_size <= 0:
            raise ValueError(f'Data size must be positive, got {data_size}')

        self.origin = origin
        self.length = length
        self.data_endianness = data_endianness
        self.data_size = data_size
        self._buffer_offset = 0

    @property
    @abstractmethod
    def _buffer(self): ...

    @abstractmethod
    def close(self): ...

    def _check_readable(self):
        pass

    def _check_writable(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()

    def _endianness_to_bo(self, endianness: Endianness):
        if endianness == Endianness.Default:
            endianness = self.data_endianness

        if endianness == Endianness.Default:
            return sys.byteorder
        elif endianness == Endianness.Little:
            return 'little'
        elif endianness == Endianness.Big:
            return 'big'

        raise NotImplementedError()

    def _slice(self, addr: int, data_size: int | None) -> slice:
        if data_size is None:
            data_size = self.data_size
        elif data_size <= 0:
            raise ValueError(f'Data size must be positive, got {data_size}')

        if addr < self.origin:
            raise RuntimeError(f'Access outside target area: {addr:#x} < {self.origin:#x}')

        if addr + data_size > self.origin + self.length:
            raise RuntimeError(f'Access outside target area: {addr + data_size:#x} > {self.origin + self.length:#x}')

        start = addr - self.origin + self._buffer_offset
        return slice(start, start + data_size)

    def read(self, addr: int,
             data_size: int | None = None, data_endianness: Endianness = Endianness.Default) -> int:
        self._check_readable()
        s = self._slice(addr, data_size)
        return int.from_bytes(self._buffer[s], self._endianness_to_bo(data_endianness), signed=False)

    def write(self, addr: int, value: int,
              data_size: int | None = None, data_endianness: Endianness = Endianness.Default):
        self._check_writable()
        s = self._slice(addr, data_size)
        self._buffer[s] = value.to_bytes(s.stop - s.start, self._endianness_to_bo(data_endianness), signed=False)


class MemoryTarget(Target):
    """Target backed by a bytearray, for simulation and tests."""

    def __init__(self, length: int, origin: int = 0,
                 data_endianness: Endianness = Endianness.Little, data_size: int = 4) -> None:
        super().__init__(origin, length, data_endianness, data_size)
        self.buf = bytearray(length)

    @property
    def _buffer(self):
        return self.buf

    def close(self):
        pass
