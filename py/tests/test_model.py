#!/usr/bin/env python3

import unittest

import regblock as rb


class AccessTagTests(unittest.TestCase):
    def test_tags(self):
        self.assertIs(rb.parse_access('RW'), rb.AccessMode.RW)
        self.assertIs(rb.parse_access('RO'), rb.AccessMode.RO)
        self.assertIs(rb.parse_access('WO'), rb.AccessMode.WO)
        self.assertIs(rb.parse_access('Clear'), rb.AccessMode.Clear)

    def test_tags_case_insensitive(self):
        self.assertIs(rb.parse_access('rw'), rb.AccessMode.RW)
        self.assertIs(rb.parse_access('CLEAR'), rb.AccessMode.Clear)

    def test_wc_alias(self):
        self.assertIs(rb.parse_access('WC'), rb.AccessMode.Clear)

    def test_enum_passthrough(self):
        self.assertIs(rb.parse_access(rb.AccessMode.WO), rb.AccessMode.WO)

    def test_unknown_tag(self):
        with self.assertRaises(rb.MalformedField):
            rb.parse_access('RC')
        with self.assertRaises(rb.MalformedField):
            rb.parse_access(3)


class FieldTests(unittest.TestCase):
    def test_make_field(self):
        f = rb.make_field('dr', 0x10, 'RW')
        self.assertEqual(f.name, 'dr')
        self.assertEqual(f.offset, 0x10)
        self.assertEqual(f.width, 4)
        self.assertIs(f.access, rb.AccessMode.RW)
        self.assertEqual(f.end, 0x14)
        self.assertIsNone(f.description)

    def test_width(self):
        f = rb.make_field('cnt', 0, 'RO', width=8)
        self.assertEqual(f.end, 8)

    def test_negative_offset(self):
        with self.assertRaisesRegex(rb.MalformedField, 'non-negative'):
            rb.make_field('dr', -4, 'RW')

    def test_non_int_offset(self):
        with self.assertRaises(rb.MalformedField):
            rb.make_field('dr', '0x4', 'RW')
        with self.assertRaises(rb.MalformedField):
            rb.make_field('dr', True, 'RW')

    def test_non_positive_width(self):
        with self.assertRaisesRegex(rb.MalformedField, 'positive'):
            rb.make_field('dr', 0, 'RW', width=0)
        with self.assertRaisesRegex(rb.MalformedField, 'positive'):
            rb.make_field('dr', 0, 'RW', width=-4)

    def test_unsupported_width(self):
        with self.assertRaises(rb.MalformedField):
            rb.make_field('dr', 0, 'RW', width=3)

    def test_bad_access(self):
        with self.assertRaisesRegex(rb.MalformedField, "Field 'dr'"):
            rb.make_field('dr', 0, 'XX')

    def test_bad_name(self):
        for name in ('', '1abc', 'a-b', 'class', None):
            with self.subTest(name=name):
                with self.assertRaises(rb.MalformedField):
                    rb.make_field(name, 0, 'RW')

    def test_immutable(self):
        f = rb.make_field('dr', 0, 'RW')
        with self.assertRaises(AttributeError):
            f.offset = 4

    def test_malformed_is_value_error(self):
        self.assertTrue(issubclass(rb.MalformedField, ValueError))


class RegisterBlockTests(unittest.TestCase):
    def test_block(self):
        block = rb.RegisterBlock('UART', [
            rb.make_field('dr', 0x00, 'RW'),
            ('sr', 0x04, 'RO'),
            ('cnt', 0x08, 'RO', 2),
        ])

        self.assertEqual(block.name, 'UART')
        self.assertEqual(len(block), 3)
        self.assertEqual(list(block.keys()), ['dr', 'sr', 'cnt'])
        self.assertEqual(block['cnt'].width, 2)
        self.assertEqual(block.size, 0x0a)
        self.assertEqual(block.index('sr'), 1)
        self.assertIn('dr', block)
        self.assertNotIn('xx', block)

    def test_empty_block(self):
        block = rb.RegisterBlock('EMPTY', [])
        self.assertEqual(len(block), 0)
        self.assertEqual(block.size, 0)

    def test_duplicate_name(self):
        with self.assertRaisesRegex(rb.MalformedField, 'duplicate'):
            rb.RegisterBlock('UART', [('dr', 0, 'RW'), ('dr', 4, 'RO')])

    def test_malformed_field_fails_block(self):
        with self.assertRaises(rb.MalformedField):
            rb.RegisterBlock('UART', [('dr', 0, 'RW'), ('sr', -1, 'RO')])

    def test_bad_block_name(self):
        with self.assertRaises(rb.MalformedField):
            rb.RegisterBlock('my block', [])

    def test_overlap_is_not_a_construction_error(self):
        block = rb.RegisterBlock('B', [('a', 0, 'RW'), ('b', 0, 'RW')])
        self.assertEqual(len(block), 2)


if __name__ == '__main__':
    unittest.main()
