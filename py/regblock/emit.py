"""Accessor generation for validated register blocks.

``emit_block`` builds a MappedRegisterBlock subclass at runtime and
``render_python`` writes equivalent standalone Python source. Both
expose exactly the operations in each field's plan: ``read_<name>``,
``write_<name>`` and ``clear_<name>``.

A clear accessor stores the all-ones word for the field width, which is
the usual write-1-to-clear pattern. The value can be overridden for a
whole block but not per field.
"""

from __future__ import annotations

import io
import logging
from typing import Sequence

import regblock.helpers
from .enums import Operation
from .mapped import MappedRegisterBlock
from .model import RegisterBlock
from .plan import AccessorPlan, accessor_name, plan_block, plan_field
from .validate import check_block

__all__ = [ 'emit_block', 'render_python', ]

log = logging.getLogger(__name__)


def _make_reader(name: str):
    def reader(self) -> int:
        return self._handle(name).read()
    return reader


def _make_writer(name: str):
    def writer(self, value: int):
        self._handle(name).write(value)
    return writer


def _make_clearer(name: str):
    def clearer(self):
        self._handle(name).clear()
    return clearer


def _make_property(name: str):
    return property(lambda self: self._handle(name), doc=f"Handle for field '{name}'")


_FACTORIES = {
    Operation.Read: _make_reader,
    Operation.Write: _make_writer,
    Operation.Clear: _make_clearer,
}


def _check_plans(block: RegisterBlock, plans: Sequence[AccessorPlan]):
    planned = [p.field for p in plans]
    if planned != list(block.fields):
        raise ValueError(f"Accessor plans do not match the fields of block '{block.name}'")

    for p in plans:
        if p.operations != plan_field(p.field).operations:
            raise ValueError(f"Accessor plan for '{p.field.name}' does not match its access mode {p.field.access.value}")


def emit_block(block: RegisterBlock, plans: Sequence[AccessorPlan] | None = None, *,
               class_name: str | None = None, clear_value: int | None = None,
               namespace: dict | None = None) -> type[MappedRegisterBlock]:
    check_block(block)

    if plans is None:
        plans = plan_block(block)
    else:
        _check_plans(block, plans)

    class_name = class_name or block.name

    ns = dict(namespace or {})
    ns['_block'] = block
    ns['_clear_value'] = clear_value
    ns.setdefault('__doc__', block.description)

    for plan in plans:
        f = plan.field

        for op in plan.ordered():
            fn = _FACTORIES[op](f.name)
            fn.__name__ = accessor_name(op, f.name)
            fn.__qualname__ = f'{class_name}.{fn.__name__}'
            fn.__doc__ = f.description
            ns[fn.__name__] = fn

        # fields starting with '_' are only reachable through regs[name]
        if not f.name.startswith('_') and not hasattr(MappedRegisterBlock, f.name) and f.name not in ns:
            ns[f.name] = _make_property(f.name)

    cls = type(class_name, (MappedRegisterBlock,), ns)

    log.debug("Emitted class '%s' with %d accessors", class_name,
              sum(len(p.operations) for p in plans))

    return cls


def render_python(block: RegisterBlock, plans: Sequence[AccessorPlan] | None = None, *,
                  class_name: str | None = None, clear_value: int | None = None) -> str:
    """Render standalone accessor source for a block.

    The generated class takes a target with ``read(addr, size)`` and
    ``write(addr, value, size)`` methods and a base address (an int or an
    object with a ``base_address()`` method).
    """
    check_block(block)

    if plans is None:
        plans = plan_block(block)
    else:
        _check_plans(block, plans)

    class_name = class_name or block.name

    out = io.StringIO()

    def emit(line: str = ''):
        print(line, file=out)

    emit(f"# Generated by regblock from block '{block.name}'. Do not edit.")
    emit()
    emit()
    emit(f'class {class_name}:')
    if block.description:
        emit(f'    {block.description!r}')
        emit()
    emit('    def __init__(self, target, base):')
    emit('        self._target = target')
    emit("        self._base = base.base_address() if hasattr(base, 'base_address') else int(base)")

    for plan in plans:
        f = plan.field
        addr = f'self._base + {f.offset:#06x}'
        mask = regblock.helpers.all_ones(f.width)

        for op in plan.ordered():
            emit()
            name = accessor_name(op, f.name)

            if op == Operation.Read:
                emit(f'    def {name}(self):')
                if f.description:
                    emit(f'        {f.description!r}')
                emit(f'        return self._target.read({addr}, {f.width})')
            elif op == Operation.Write:
                emit(f'    def {name}(self, value):')
                if f.description:
                    emit(f'        {f.description!r}')
                emit(f'        if not isinstance(value, int) or not 0 <= value <= {mask:#x}:')
                emit(f"            raise ValueError(f'Value {{value!r}} does not fit in {f.width}-byte register {f.name}')")
                emit(f'        self._target.write({addr}, value, {f.width})')
            else:
                sentinel = mask if clear_value is None else clear_value & mask
                emit(f'    def {name}(self):')
                if f.description:
                    emit(f'        {f.description!r}')
                emit(f'        self._target.write({addr}, {sentinel:#x}, {f.width})')

    return out.getvalue()
