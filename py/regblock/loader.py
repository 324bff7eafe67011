"""Load register block declarations from JSON or CSV files.

JSON input is a block object, a list of block objects, or an object with
a "blocks" list:

    {"name": "UART", "fields": [
        {"name": "dr", "offset": "0x00", "access": "RW"},
        {"name": "sr", "offset": 4, "access": "RO", "width": 4}]}

CSV input has one field per row: block,name,offset,access[,width]. Blank
rows and rows starting with '#' are ignored, as is a leading header row.
"""

from __future__ import annotations

import csv
import json
import os
from typing import IO, Any

from .helpers import parse_int
from .model import MalformedField, RegisterBlock, make_field, DEFAULT_WIDTH

__all__ = [ 'load', 'load_json', 'load_csv', 'blocks_from_dict', ]


def _int(value: Any, what: str) -> int:
    if isinstance(value, str):
        try:
            return parse_int(value)
        except ValueError:
            raise MalformedField(f'{what}: invalid integer {value!r}') from None
    return value


def _open(source: str | os.PathLike | IO[str]):
    if isinstance(source, (str, os.PathLike)):
        return open(source, newline='', encoding='utf-8')
    return source


def _block_from_dict(d: dict) -> RegisterBlock:
    if not isinstance(d, dict) or 'name' not in d:
        raise MalformedField(f'Block definition must be an object with a name, got {d!r}')

    field_defs = d.get('fields', [])
    if not isinstance(field_defs, list):
        raise MalformedField(f"Block '{d['name']}': fields must be a list, got {type(field_defs).__name__}")

    fields = []
    for fd in field_defs:
        try:
            name = fd['name']
            fields.append(make_field(name,
                                     _int(fd['offset'], f"Field '{name}' offset"),
                                     fd['access'],
                                     _int(fd.get('width', DEFAULT_WIDTH), f"Field '{name}' width"),
                                     fd.get('description')))
        except (KeyError, TypeError) as e:
            raise MalformedField(f"Block '{d['name']}': incomplete field definition {fd!r}") from e

    return RegisterBlock(d['name'], fields, d.get('description'))


def blocks_from_dict(data: dict | list) -> list[RegisterBlock]:
    if isinstance(data, dict) and 'blocks' in data:
        data = data['blocks']

    if isinstance(data, dict):
        data = [data]

    if not isinstance(data, list):
        raise MalformedField(f'Expected a block or a list of blocks, got {type(data).__name__}')

    return [_block_from_dict(d) for d in data]


def load_json(source: str | os.PathLike | IO[str]) -> list[RegisterBlock]:
    f = _open(source)
    try:
        data = json.load(f)
    finally:
        if f is not source:
            f.close()

    return blocks_from_dict(data)


def load_csv(source: str | os.PathLike | IO[str]) -> list[RegisterBlock]:
    blocks: dict[str, list] = {}

    f = _open(source)
    try:
        for lineno, row in enumerate(csv.reader(f), 1):
            row = [c.strip() for c in row]

            if not row or not any(row) or row[0].startswith('#'):
                continue

            if lineno == 1 and row[0].lower() == 'block':
                continue

            if len(row) not in (4, 5):
                raise MalformedField(f'Line {lineno}: expected block,name,offset,access[,width], got {len(row)} columns')

            block_name, name, offset, access = row[:4]
            width = _int(row[4], f'Line {lineno} width') if len(row) == 5 and row[4] else DEFAULT_WIDTH

            field = make_field(name, _int(offset, f'Line {lineno} offset'), access, width)
            blocks.setdefault(block_name, []).append(field)
    finally:
        if f is not source:
            f.close()

    return [RegisterBlock(name, fields) for name, fields in blocks.items()]


def load(path: str | os.PathLike, fmt: str | None = None) -> list[RegisterBlock]:
    if fmt is None:
        ext = os.path.splitext(os.fspath(path))[1].lower()
        fmt = 'csv' if ext == '.csv' else 'json'

    if fmt == 'csv':
        return load_csv(path)
    elif fmt == 'json':
        return load_json(path)

    raise ValueError(f'Unknown input format {fmt!r}')
