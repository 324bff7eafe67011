"""Overlap validation for register blocks.

Two fields conflict when their byte ranges intersect and their access
modes are not compatible. RO fields may overlap anything except RW,
which never shares an address with another field. Of the mutating
modes, WO and Clear may only overlap RO fields.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Sequence

from .enums import AccessMode, OverlapKind
from .model import Field, OverlapViolation, RegisterBlock

__all__ = [ 'Violation', 'ranges_intersect', 'classify_overlap', 'find_violations', 'check_block', ]

log = logging.getLogger(__name__)

_WO_CLEAR_KINDS = {
    frozenset([AccessMode.WO]): OverlapKind.WoWoOverlap,
    frozenset([AccessMode.WO, AccessMode.Clear]): OverlapKind.WoClearOverlap,
    frozenset([AccessMode.Clear]): OverlapKind.ClearClearOverlap,
}


@dataclass(frozen=True)
class Violation:
    field_a: Field
    field_b: Field
    reason: OverlapKind

    @property
    def names(self) -> frozenset[str]:
        return frozenset((self.field_a.name, self.field_b.name))


def ranges_intersect(a: Field, b: Field) -> bool:
    return a.offset < b.end and b.offset < a.end


def classify_overlap(a: Field, b: Field) -> OverlapKind | None:
    """Return the conflict kind for two overlapping fields, or None if allowed.

    Only the access modes are considered; the caller checks the ranges.
    """
    if a.access is AccessMode.RW and b.access is AccessMode.RW:
        return OverlapKind.RwRwOverlap

    if AccessMode.RW in (a.access, b.access):
        return OverlapKind.RwOtherOverlap

    if AccessMode.RO in (a.access, b.access):
        return None

    return _WO_CLEAR_KINDS[frozenset((a.access, b.access))]


def find_violations(fields: Sequence[Field]) -> list[Violation]:
    """Check every pair of fields and return all conflicts.

    The result is ordered by the position of the pair's first field, then
    of its second field, in the given sequence.
    """
    violations = []

    for a, b in itertools.combinations(fields, 2):
        if not ranges_intersect(a, b):
            continue

        kind = classify_overlap(a, b)
        if kind is not None:
            violations.append(Violation(a, b, kind))

    return violations


def check_block(block: RegisterBlock) -> RegisterBlock:
    violations = find_violations(block.fields)

    log.debug("Block '%s': %d fields, %d violations", block.name, len(block), len(violations))

    if violations:
        raise OverlapViolation(block, violations)

    return block
