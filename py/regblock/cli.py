"""Command-line interface for regblock."""

from __future__ import annotations

import argparse
import logging
import sys

import tabulate
tabulate.PRESERVE_WHITESPACE = True

import regblock
from .compiler import compile_block
from .diagnostics import format_range
from .enums import MapMode, Operation
from .helpers import parse_int
from .loader import load
from .mmaptarget import MMapTarget
from .model import OverlapViolation
from .plan import plan_block
from .validate import find_violations

log = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='regblock',
        description='Validate register block declarations and generate accessors',
    )
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Increase log output')
    parser.add_argument('--format', choices=('json', 'csv'),
                        help='Input format (default: from file extension)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    check_parser = subparsers.add_parser('check', help='Check blocks for conflicting fields')
    check_parser.add_argument('files', nargs='+', metavar='FILE')

    plan_parser = subparsers.add_parser('plan', help='Show the accessors generated for each field')
    plan_parser.add_argument('file', metavar='FILE')

    gen_parser = subparsers.add_parser('gen', help='Generate Python accessor source')
    gen_parser.add_argument('file', metavar='FILE')
    gen_parser.add_argument('-b', '--block', help='Only generate the named block')
    gen_parser.add_argument('-o', '--output', metavar='OUT', help='Output file (default: stdout)')

    dump_parser = subparsers.add_parser('dump', help='Read all readable fields of a mapped block')
    dump_parser.add_argument('file', metavar='FILE')
    dump_parser.add_argument('block', metavar='BLOCK')
    dump_parser.add_argument('base', metavar='BASE', type=parse_int, help='Base address, e.g. 0x48020000')
    dump_parser.add_argument('--mem', default='/dev/mem', help='File to map (default: /dev/mem)')

    return parser.parse_args(argv)


def cmd_check(args: argparse.Namespace) -> int:
    errors = 0

    for path in args.files:
        for block in load(path, args.format):
            violations = find_violations(block.fields)
            if violations:
                print(OverlapViolation(block, violations), file=sys.stderr)
                errors += len(violations)
            else:
                print(f"{path}: block '{block.name}': {len(block)} fields, no conflicts")

    return 1 if errors else 0


def cmd_plan(args: argparse.Namespace) -> int:
    table = []

    for block in load(args.file, args.format):
        table.append((block.name, '', '', ''))
        for p in plan_block(block):
            f = p.field
            table.append(('    ' + f.name, format_range(f), f.access.value, ', '.join(p.accessor_names())))

    print(tabulate.tabulate(table, headers=('Name', 'Range', 'Access', 'Accessors')))
    return 0


def cmd_gen(args: argparse.Namespace) -> int:
    blocks = load(args.file, args.format)

    if args.block:
        blocks = [b for b in blocks if b.name == args.block]
        if not blocks:
            print(f'Error: block {args.block!r} not found in {args.file}', file=sys.stderr)
            return 1

    # the output is only opened once every block has compiled
    text = '\n\n'.join(compile_block(b).source() for b in blocks)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
    else:
        sys.stdout.write(text)

    log.info('Generated %d block(s) from %s', len(blocks), args.file)

    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    blocks = {b.name: b for b in load(args.file, args.format)}
    if args.block not in blocks:
        print(f'Error: block {args.block!r} not found in {args.file}', file=sys.stderr)
        return 1

    compiled = compile_block(blocks[args.block])
    block = compiled.block

    table = []
    with MMapTarget(args.mem, args.base, block.size, mode=MapMode.Read) as target:
        regs = compiled(target, args.base)
        for p in compiled.plans:
            if Operation.Read not in p:
                continue
            f = p.field
            value = regs[f.name].read()
            table.append((f.name, f'{regs[f.name].address:#x}', f'{value:#0{f.width * 2 + 2}x}'))

    print(tabulate.tabulate(table, headers=('Field', 'Address', 'Value')))
    return 0


COMMANDS = {
    'check': cmd_check,
    'plan': cmd_plan,
    'gen': cmd_gen,
    'dump': cmd_dump,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    log_level = {
        0: logging.ERROR,
        1: logging.WARNING,
        2: logging.INFO,
    }.get(args.verbose, logging.DEBUG)
    regblock.log.setLevel(log_level)

    try:
        return COMMANDS[args.command](args)
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
