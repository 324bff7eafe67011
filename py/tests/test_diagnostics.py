#!/usr/bin/env python3

import unittest

import regblock as rb


def conflicting_block():
    return rb.RegisterBlock('Periph', [
        ('ctrl', 0x00, 'RW'),
        ('status', 0x04, 'RO'),
        ('irq_clr', 0x08, 'Clear'),
        ('irq_set', 0x08, 'WO'),
        ('ctrl_mirror', 0x02, 'RO'),
        ('ctrl_wo', 0x00, 'WO'),
    ])


class DiagnosticTests(unittest.TestCase):
    def test_message(self):
        block = rb.RegisterBlock('Periph', [('a', 0x00, 'RW'), ('b', 0x00, 'RO')])
        diags = rb.report_violations(block, rb.find_violations(block.fields))

        self.assertEqual(len(diags), 1)
        self.assertEqual(
            diags[0].message,
            "Periph: field 'a' [0x0000, 0x0004) RW overlaps field 'b' [0x0000, 0x0004) RO: "
            "RW field may not share an address with any other field (RwOtherOverlap)")

    def test_ordering_follows_field_sequence(self):
        block = conflicting_block()
        violations = rb.find_violations(block.fields)
        diags = rb.report_violations(block, list(reversed(violations)))

        self.assertEqual([(d.field_a.name, d.field_b.name) for d in diags], [
            ('ctrl', 'ctrl_mirror'),
            ('ctrl', 'ctrl_wo'),
            ('irq_clr', 'irq_set'),
        ])

    def test_pair_normalized(self):
        block = conflicting_block()
        a = block['ctrl']
        b = block['status']
        diags = rb.report_violations(block, [rb.Violation(b, a, rb.OverlapKind.RwOtherOverlap)])
        self.assertEqual((diags[0].field_a, diags[0].field_b), (a, b))

    def test_report_is_reproducible(self):
        reports = set()
        for _ in range(3):
            with self.assertRaises(rb.OverlapViolation) as cm:
                rb.check_block(conflicting_block())
            reports.add(str(cm.exception))

        self.assertEqual(len(reports), 1)
        report = reports.pop()
        self.assertEqual(len(report.splitlines()), 4)
        self.assertTrue(report.endswith('3 overlap violations'))
        self.assertIn('WoClearOverlap', report)

    def test_format_report_singular(self):
        block = rb.RegisterBlock('P', [('a', 0, 'WO'), ('b', 0, 'WO')])
        report = rb.format_report(rb.report_violations(block, rb.find_violations(block.fields)))
        self.assertTrue(report.endswith('1 overlap violation'))

    def test_format_table(self):
        block = conflicting_block()
        table = rb.format_table(rb.report_violations(block, rb.find_violations(block.fields)))
        self.assertIn('Conflict', table)
        self.assertIn('irq_set', table)
        self.assertIn('WoClearOverlap', table)


if __name__ == '__main__':
    unittest.main()
