"""Human-readable reports for overlap violations.

Reports are ordered by where the conflicting fields first appear in the
block, so the same input always produces the same text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import tabulate

from .enums import OverlapKind
from .model import Field, RegisterBlock

if TYPE_CHECKING:
    from .validate import Violation

__all__ = [ 'Diagnostic', 'report_violations', 'format_report', 'format_table', 'format_range', ]


def format_range(f: Field) -> str:
    return f'[{f.offset:#06x}, {f.end:#06x})'


@dataclass(frozen=True)
class Diagnostic:
    block: str
    field_a: Field
    field_b: Field
    reason: OverlapKind

    @property
    def message(self) -> str:
        a = self.field_a
        b = self.field_b
        return (f"{self.block}: field '{a.name}' {format_range(a)} {a.access.value} overlaps "
                f"field '{b.name}' {format_range(b)} {b.access.value}: "
                f"{self.reason.rule} ({self.reason.name})")

    def __str__(self) -> str:
        return self.message


def report_violations(block: RegisterBlock, violations: Sequence[Violation]) -> list[Diagnostic]:
    def key(d: Diagnostic):
        return (block.index(d.field_a.name), block.index(d.field_b.name))

    diags = []
    for v in violations:
        a, b = v.field_a, v.field_b
        if block.index(b.name) < block.index(a.name):
            a, b = b, a
        diags.append(Diagnostic(block.name, a, b, v.reason))

    return sorted(diags, key=key)


def format_report(diagnostics: Sequence[Diagnostic]) -> str:
    lines = [d.message for d in diagnostics]
    n = len(diagnostics)
    lines.append(f'{n} overlap violation{"" if n == 1 else "s"}')
    return '\n'.join(lines)


def format_table(diagnostics: Sequence[Diagnostic]) -> str:
    table = []
    for d in diagnostics:
        a = d.field_a
        b = d.field_b
        table.append((d.block, a.name, format_range(a), a.access.value,
                      b.name, format_range(b), b.access.value, d.reason.name))

    return tabulate.tabulate(table, headers=('Block', 'Field', 'Range', 'Access',
                                             'Field', 'Range', 'Access', 'Conflict'))
