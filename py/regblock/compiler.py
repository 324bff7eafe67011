from __future__ import annotations

import logging
from dataclasses import dataclass

from .emit import emit_block, render_python
from .mapped import MappedRegisterBlock
from .model import RegisterBlock
from .plan import AccessorPlan, plan_block
from .validate import check_block

__all__ = [ 'CompiledBlock', 'compile_block', ]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledBlock:
    block: RegisterBlock
    plans: tuple[AccessorPlan, ...]
    cls: type[MappedRegisterBlock]
    clear_value: int | None = None

    @property
    def accessor_names(self) -> list[str]:
        return [name for p in self.plans for name in p.accessor_names()]

    def source(self) -> str:
        return render_python(self.block, self.plans, class_name=self.cls.__name__,
                             clear_value=self.clear_value)

    def __call__(self, target, base) -> MappedRegisterBlock:
        return self.cls(target, base)


def compile_block(block: RegisterBlock, *, class_name: str | None = None,
                  clear_value: int | None = None) -> CompiledBlock:
    """Validate, plan and emit a register block.

    Raises OverlapViolation listing every conflict if the block does not
    validate; nothing is emitted in that case.
    """
    check_block(block)

    plans = tuple(plan_block(block))
    for p in plans:
        log.debug('%s.%s: %s', block.name, p.field.name, ', '.join(p.accessor_names()))

    cls = emit_block(block, plans, class_name=class_name, clear_value=clear_value)

    log.info("Compiled block '%s': %d fields, %d accessors", block.name, len(block),
             sum(len(p.operations) for p in plans))

    return CompiledBlock(block, plans, cls, clear_value)
