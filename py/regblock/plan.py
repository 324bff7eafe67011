from __future__ import annotations

from dataclasses import dataclass

from .enums import AccessMode, Operation
from .model import Field, RegisterBlock

__all__ = [ 'AccessorPlan', 'plan_field', 'plan_block', 'accessor_name', ]

_OPERATIONS = {
    AccessMode.RW: frozenset([Operation.Read, Operation.Write]),
    AccessMode.RO: frozenset([Operation.Read]),
    AccessMode.WO: frozenset([Operation.Write]),
    AccessMode.Clear: frozenset([Operation.Clear]),
}

# Order in which accessors are emitted for a field
_ORDER = (Operation.Read, Operation.Write, Operation.Clear)


def accessor_name(op: Operation, field_name: str) -> str:
    return f'{op.value}_{field_name}'


@dataclass(frozen=True)
class AccessorPlan:
    field: Field
    operations: frozenset[Operation]

    def __contains__(self, op: Operation) -> bool:
        return op in self.operations

    def ordered(self) -> list[Operation]:
        return [op for op in _ORDER if op in self.operations]

    def accessor_names(self) -> list[str]:
        return [accessor_name(op, self.field.name) for op in self.ordered()]


def plan_field(field: Field) -> AccessorPlan:
    return AccessorPlan(field, _OPERATIONS[field.access])


def plan_block(block: RegisterBlock) -> list[AccessorPlan]:
    return [plan_field(f) for f in block.fields]
