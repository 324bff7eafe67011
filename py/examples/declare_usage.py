#!/usr/bin/env python3
"""
Regblock Example: Declaring and Using a Register Block

This example declares a small UART-like block with the register_block
decorator, maps it over a temporary file and exercises the generated
accessors. Only the operations each access mode allows are generated.
"""

import os
import tempfile

import regblock as rb
from regblock import register, register_block


@register_block
class Uart:
    """UART register subset"""

    dr = register(offset=0x00, access='RW', description='Data register')
    sr = register(offset=0x04, access='RO', description='Status register')
    ecr = register(offset=0x08, access='WO', description='Error clear register')
    # Read view of the error clear register address
    rsr = register(offset=0x08, access='RO', description='Receive status register')
    icr = register(offset=0x0C, access='Clear', description='Interrupt clear register')


def main():
    with tempfile.NamedTemporaryFile(suffix='.bin') as f:
        f.write(bytes(0x10))
        f.flush()

        size = Uart.block().size

        with Uart(rb.MMapTarget(f.name, 0, size, rb.Endianness.Little), 0) as uart:
            print('Accessors:', ', '.join(n for n in dir(uart) if n.startswith(('read_', 'write_', 'clear_'))))

            uart.write_dr(0x41)
            print(f'  dr:  0x{uart.read_dr():08x}')

            uart.write_ecr(0x5)
            print(f'  rsr: 0x{uart.read_rsr():08x}')

            uart.clear_icr()
            print(f'  icr: cleared with 0x{uart.icr.clear_value:08x}')

    bad = rb.RegisterBlock('Bad', [('ctrl', 0x00, 'RW'), ('ctrl_wo', 0x00, 'WO')])
    try:
        rb.compile_block(bad)
    except rb.OverlapViolation as e:
        print('Rejected block:')
        print(e)


if __name__ == '__main__':
    main()
