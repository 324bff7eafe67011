#!/usr/bin/env python3

import unittest

import regblock as rb

Op = rb.Operation


class PlanTests(unittest.TestCase):
    def test_table(self):
        expected = {
            rb.AccessMode.RW: {Op.Read, Op.Write},
            rb.AccessMode.RO: {Op.Read},
            rb.AccessMode.WO: {Op.Write},
            rb.AccessMode.Clear: {Op.Clear},
        }
        for mode, ops in expected.items():
            with self.subTest(mode=mode):
                plan = rb.plan_field(rb.make_field('x', 0, mode))
                self.assertEqual(plan.operations, frozenset(ops))

    def test_deterministic(self):
        f = rb.make_field('x', 0, 'RW')
        self.assertEqual(rb.plan_field(f), rb.plan_field(f))

    def test_accessor_names(self):
        self.assertEqual(rb.plan_field(rb.make_field('dr', 0, 'RW')).accessor_names(), ['read_dr', 'write_dr'])
        self.assertEqual(rb.plan_field(rb.make_field('sr', 0, 'RO')).accessor_names(), ['read_sr'])
        self.assertEqual(rb.plan_field(rb.make_field('ecr', 0, 'WO')).accessor_names(), ['write_ecr'])
        self.assertEqual(rb.plan_field(rb.make_field('icr', 0, 'Clear')).accessor_names(), ['clear_icr'])

    def test_contains(self):
        plan = rb.plan_field(rb.make_field('sr', 0, 'RO'))
        self.assertIn(Op.Read, plan)
        self.assertNotIn(Op.Write, plan)

    def test_plan_block(self):
        block = rb.RegisterBlock('B', [('a', 0, 'RW'), ('b', 4, 'Clear')])
        plans = rb.plan_block(block)
        self.assertEqual([p.field.name for p in plans], ['a', 'b'])
        self.assertEqual(plans[1].operations, frozenset([Op.Clear]))

    def test_plan_does_not_validate(self):
        block = rb.RegisterBlock('B', [('a', 0, 'RW'), ('b', 0, 'RW')])
        self.assertEqual(len(rb.plan_block(block)), 2)


if __name__ == '__main__':
    unittest.main()
