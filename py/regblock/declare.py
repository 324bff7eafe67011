"""Class-based register block declarations.

    @register_block
    class Uart:
        dr = register(offset=0x00, access='RW')
        sr = register(offset=0x04, access='RO')

The decorated class is replaced by the generated accessor class. Field
order is the order of the class attributes. Conflicting declarations
raise OverlapViolation when the class body is executed.
"""

from __future__ import annotations

from dataclasses import dataclass

from .emit import emit_block
from .enums import AccessMode
from .model import DEFAULT_WIDTH, MalformedField, RegisterBlock, make_field

__all__ = [ 'RegisterDecl', 'register', 'register_block', ]

_SKIP = ('__dict__', '__weakref__')


@dataclass(frozen=True)
class RegisterDecl:
    offset: int
    access: str | AccessMode
    width: int = DEFAULT_WIDTH
    description: str | None = None


def register(offset: int, access: str | AccessMode, width: int = DEFAULT_WIDTH,
             description: str | None = None) -> RegisterDecl:
    return RegisterDecl(offset, access, width, description)


def register_block(cls: type | None = None, *, name: str | None = None, clear_value: int | None = None):
    def wrap(cls: type):
        fields = []
        namespace = {}

        for attr, value in cls.__dict__.items():
            if isinstance(value, RegisterDecl):
                fields.append(make_field(attr, value.offset, value.access, value.width, value.description))
            elif attr not in _SKIP:
                namespace[attr] = value

        if not fields:
            raise MalformedField(f"register_block '{cls.__name__}' declares no registers")

        block = RegisterBlock(name or cls.__name__, fields, cls.__doc__)

        return emit_block(block, class_name=cls.__name__, clear_value=clear_value, namespace=namespace)

    if cls is None:
        return wrap

    return wrap(cls)
