import unittest

from ztex.support.binary_prefix import binary_prefix, binary_prefix_split


class BinaryPrefixTestCase(unittest.TestCase):
    def test_gibi(self):
        self.assertEqual(binary_prefix(1073741824, "B"), "1GiB (1073741824B)")
        self.assertEqual(binary_prefix(3 << 30, "B"), "3GiB (3221225472B)")

    def test_mebi(self):
        self.assertEqual(binary_prefix(1 << 20, "B"), "1MiB (1048576B)")
        self.assertEqual(binary_prefix(1536 << 20, "B"), "1536MiB (1610612736B)")

    def test_kibi(self):
        self.assertEqual(binary_prefix(1024, "B"), "1KiB (1024B)")
        self.assertEqual(binary_prefix(4096, "B"), "4KiB (4096B)")
        self.assertEqual(binary_prefix(1536 << 10, "B"), "1536KiB (1572864B)")

    def test_literal(self):
        self.assertEqual(binary_prefix(1536, "B"), "1536B")
        self.assertEqual(binary_prefix(1, "B"), "1B")
        self.assertEqual(binary_prefix(1023, "B"), "1023B")
        self.assertEqual(binary_prefix((1 << 30) + 1, "B"), "1073741825B")

    def test_zero(self):
        self.assertEqual(binary_prefix(0, "B"), "0B")
        self.assertEqual(binary_prefix_split(0), (0, 0, ""))

    def test_unit(self):
        self.assertEqual(binary_prefix(2048, "bit"), "2Kibit (2048bit)")

    def test_exact(self):
        for num in (1, 1000, 1024, 1025, 65536, 3 << 20, (5 << 30) + (1 << 20), 1 << 63,
                    (1 << 64) - 1):
            value, factor, prefix = binary_prefix_split(num)
            self.assertEqual(value * 1024 ** factor, num)

    def test_long_prefix(self):
        self.assertEqual(binary_prefix_split(1 << 20, long_prefix=True), (1, 2, "Mebi"))

    def test_large(self):
        self.assertEqual(binary_prefix(1 << 40, "B"), "1024GiB (1099511627776B)")

    def test_misuse(self):
        with self.assertRaises(ValueError):
            binary_prefix(-1, "B")
        with self.assertRaises(ValueError):
            binary_prefix(1.5, "B")
