from __future__ import annotations

import collections.abc
import keyword
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence

from .enums import AccessMode

if TYPE_CHECKING:
    from .validate import Violation

__all__ = [
    'RegBlockError', 'MalformedField', 'OverlapViolation',
    'Field', 'RegisterBlock', 'make_field', 'parse_access',
    'DEFAULT_WIDTH', 'SUPPORTED_WIDTHS',
]

DEFAULT_WIDTH = 4
SUPPORTED_WIDTHS = (1, 2, 4, 8)

# 'WC' is the write-to-clear spelling used by register description tools
_ACCESS_TAGS = {
    'RW': AccessMode.RW,
    'RO': AccessMode.RO,
    'WO': AccessMode.WO,
    'CLEAR': AccessMode.Clear,
    'WC': AccessMode.Clear,
}


class RegBlockError(ValueError):
    """Base class for register block compilation errors."""
    pass


class MalformedField(RegBlockError):
    """Raised when a field definition cannot be normalized."""
    pass


class OverlapViolation(RegBlockError):
    """Raised when a block has conflicting fields.

    Carries every violation found in the block, not only the first one.
    """

    def __init__(self, block: RegisterBlock, violations: Sequence[Violation]) -> None:
        from .diagnostics import format_report, report_violations

        self.block = block
        self.violations = list(violations)
        self.diagnostics = report_violations(block, self.violations)
        super().__init__(format_report(self.diagnostics))


def parse_access(tag: str | AccessMode) -> AccessMode:
    if isinstance(tag, AccessMode):
        return tag

    if not isinstance(tag, str):
        raise MalformedField(f'Access mode must be a string, got {type(tag).__name__}')

    access = _ACCESS_TAGS.get(tag.strip().upper())
    if access is None:
        raise MalformedField(f"Unknown access mode '{tag}'. Use RW, RO, WO or Clear.")

    return access


@dataclass(frozen=True)
class Field:
    name: str
    offset: int
    access: AccessMode
    width: int = DEFAULT_WIDTH
    description: str | None = None

    def __post_init__(self) -> None:
        self._validate_inputs()
        try:
            access = parse_access(self.access)
        except MalformedField as e:
            raise MalformedField(f"Field '{self.name}': {e}") from None
        object.__setattr__(self, 'access', access)

    def _validate_inputs(self) -> None:
        """Validate field inputs and raise descriptive errors."""
        name = self.name

        if not name or not isinstance(name, str):
            raise MalformedField('Field name must be a non-empty string')

        if not name.isidentifier() or keyword.iskeyword(name):
            raise MalformedField(f"Field '{name}': name must be a valid identifier")

        if not isinstance(self.offset, int) or isinstance(self.offset, bool):
            raise MalformedField(f"Field '{name}': offset must be an integer, got {type(self.offset).__name__}")

        if self.offset < 0:
            raise MalformedField(f"Field '{name}': offset must be non-negative, got {self.offset}")

        if not isinstance(self.width, int) or isinstance(self.width, bool):
            raise MalformedField(f"Field '{name}': width must be an integer, got {type(self.width).__name__}")

        if self.width <= 0:
            raise MalformedField(f"Field '{name}': width must be positive, got {self.width}")

        if self.width not in SUPPORTED_WIDTHS:
            raise MalformedField(f"Field '{name}': width must be 1, 2, 4 or 8 bytes, got {self.width}")

        if self.description is not None and not isinstance(self.description, str):
            raise MalformedField(f"Field '{name}': description must be a string or None, got {type(self.description).__name__}")

    @property
    def end(self) -> int:
        return self.offset + self.width

    def __str__(self) -> str:
        return f'{self.name}@{self.offset:#x}/{self.access.value}'


def make_field(name: str, offset: int, access: str | AccessMode,
               width: int = DEFAULT_WIDTH, description: str | None = None) -> Field:
    return Field(name, offset, access, width, description)


class RegisterBlock(collections.abc.Mapping):
    def __init__(self, name: str, fields: Sequence[Field | tuple], description: str | None = None) -> None:
        if not name or not isinstance(name, str) or not name.isidentifier():
            raise MalformedField(f'Block name must be a valid identifier, got {name!r}')

        self._name = name
        self._description = description

        self._fields = tuple(f if isinstance(f, Field) else make_field(*f) for f in fields)

        by_name: dict[str, Field] = {}
        for f in self._fields:
            if f.name in by_name:
                raise MalformedField(f"Block '{name}': duplicate field name '{f.name}'")
            by_name[f.name] = f
        self._by_name = by_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._fields

    @property
    def size(self) -> int:
        return max((f.end for f in self._fields), default=0)

    def index(self, name: str) -> int:
        return self._fields.index(self._by_name[name])

    def __getitem__(self, key: str) -> Field:
        return self._by_name[key]

    def __iter__(self) -> Iterator[str]:
        return (f.name for f in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f'RegisterBlock({self._name!r}, {len(self._fields)} fields)'
