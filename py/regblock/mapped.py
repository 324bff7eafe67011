from __future__ import annotations

import collections.abc

import regblock.helpers
from .address import AddressProvider, resolve_base_address
from .enums import AccessMode
from .model import Field, RegisterBlock
from .target import Target

__all__ = [
    'MappedRegister', 'ReadOnlyRegister', 'WriteOnlyRegister', 'ReadWriteRegister', 'ClearOnlyRegister',
    'MappedRegisterBlock', 'HANDLE_TYPES',
]


class MappedRegister:
    """A field bound to an absolute address on a target.

    Subclasses expose only the operations the field's access mode allows.
    """

    def __init__(self, target: Target, field: Field, base: int) -> None:
        self._target = target
        self._field = field
        self._addr = base + field.offset

    @property
    def name(self) -> str:
        return self._field.name

    @property
    def address(self) -> int:
        return self._addr

    @property
    def width(self) -> int:
        return self._field.width

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._field.name!r} @ {self._addr:#x})'


class _Readable:
    def read(self) -> int:
        return self._target.read(self._addr, data_size=self._field.width)

    @property
    def value(self) -> int:
        return self.read()

    def __int__(self):
        return self.read()


class _Writable:
    def write(self, value: int):
        width = self._field.width
        if not isinstance(value, int) or not regblock.helpers.fits(value, width):
            raise ValueError(f"Value {value!r} does not fit in {width}-byte register '{self._field.name}'")

        self._target.write(self._addr, value, data_size=width)


class ReadOnlyRegister(_Readable, MappedRegister):
    pass


class WriteOnlyRegister(_Writable, MappedRegister):
    pass


class ReadWriteRegister(_Readable, _Writable, MappedRegister):
    pass


class ClearOnlyRegister(MappedRegister):
    def __init__(self, target: Target, field: Field, base: int, clear_value: int | None = None) -> None:
        super().__init__(target, field, base)
        if clear_value is None:
            clear_value = regblock.helpers.all_ones(field.width)
        self._clear_value = clear_value & regblock.helpers.all_ones(field.width)

    @property
    def clear_value(self) -> int:
        return self._clear_value

    def clear(self):
        self._target.write(self._addr, self._clear_value, data_size=self._field.width)


HANDLE_TYPES: dict[AccessMode, type[MappedRegister]] = {
    AccessMode.RW: ReadWriteRegister,
    AccessMode.RO: ReadOnlyRegister,
    AccessMode.WO: WriteOnlyRegister,
    AccessMode.Clear: ClearOnlyRegister,
}


class MappedRegisterBlock(collections.abc.Mapping):
    """Base class for generated register blocks.

    Subclasses set ``_block`` (and optionally ``_clear_value``); the
    accessor methods themselves are added by the emitter.
    """

    _block: RegisterBlock
    _clear_value: int | None = None

    def __init__(self, target: Target, base: AddressProvider) -> None:
        self._target = target
        self._base = resolve_base_address(base)
        self._registers: dict[str, MappedRegister | None] = dict.fromkeys(self._block.keys())

    @property
    def base_address(self) -> int:
        return self._base

    @property
    def target(self) -> Target:
        return self._target

    @classmethod
    def block(cls) -> RegisterBlock:
        return cls._block

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self._target.close()

    def _handle(self, key: str) -> MappedRegister:
        mr = self._registers.get(key)
        if mr is not None:
            return mr

        f = self._block[key]
        handle_type = HANDLE_TYPES[f.access]
        if handle_type is ClearOnlyRegister:
            mr = ClearOnlyRegister(self._target, f, self._base, self._clear_value)
        else:
            mr = handle_type(self._target, f, self._base)
        self._registers[key] = mr
        return mr

    def __getitem__(self, key: str) -> MappedRegister:
        if key not in self._registers:
            raise KeyError(f'MappedRegister "{key}" not found')

        return self._handle(key)

    def __iter__(self):
        return iter(self._registers)

    def __len__(self):
        return len(self._registers)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(base={self._base:#x})'
