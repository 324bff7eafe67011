"""Base address providers.

A generated register block resolves its base address once, when it is
constructed. The provider can be a plain int, a BaseAddress object or a
zero-argument callable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Union

__all__ = [ 'BaseAddress', 'FixedAddress', 'ConstantAddress', 'AddressProvider', 'resolve_base_address', ]


class BaseAddress(ABC):
    @abstractmethod
    def base_address(self) -> int: ...


class FixedAddress(BaseAddress):
    """Base address computed at runtime and fixed for the provider's lifetime."""

    def __init__(self, addr: int) -> None:
        self._addr = _check_address(addr)

    def base_address(self) -> int:
        return self._addr

    def __repr__(self) -> str:
        return f'FixedAddress({self._addr:#x})'


class ConstantAddress(BaseAddress):
    """Base address bound to a class, e.g. ``ConstantAddress.at(0x4000_0000)``."""

    BASE: int = 0

    @classmethod
    def at(cls, addr: int) -> type[ConstantAddress]:
        _check_address(addr)
        return type(f'ConstantAddress_{addr:x}', (cls,), {'BASE': addr})

    def base_address(self) -> int:
        return type(self).BASE

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


AddressProvider = Union[int, BaseAddress, Callable[[], int], type]


def _check_address(addr) -> int:
    if not isinstance(addr, int) or isinstance(addr, bool):
        raise TypeError(f'Base address must be an integer, got {type(addr).__name__}')
    if addr < 0:
        raise ValueError(f'Base address must be non-negative, got {addr:#x}')
    return addr


def resolve_base_address(provider: AddressProvider) -> int:
    if isinstance(provider, type) and issubclass(provider, BaseAddress):
        provider = provider()

    if isinstance(provider, BaseAddress):
        addr = provider.base_address()
    elif isinstance(provider, int):
        addr = provider
    elif callable(provider):
        addr = provider()
    else:
        raise TypeError(f'Cannot resolve a base address from {type(provider).__name__}')

    return _check_address(addr)
