import unittest

from ztex.database.ztex import product_by_id, fpga_parts, board_types, ram_types


class ProductTestCase(unittest.TestCase):
    def assertProduct(self, product_id, name):
        product = product_by_id(product_id)
        self.assertIsNotNone(product)
        self.assertEqual(product.name, name)

    def test_default(self):
        self.assertProduct((0, 0, 0, 0), "Default")

    def test_experimental(self):
        self.assertProduct((1, 2, 3, 4), "Experimental")

    def test_modules(self):
        self.assertProduct((10, 11, 0, 0), "ZTEX USB-FPGA Module 1.2")
        self.assertProduct((10, 17, 1, 2), "ZTEX USB-FPGA Module 2.13")
        self.assertProduct((10, 42, 0, 0), "ZTEX USB3-FPGA Module 2.18")
        self.assertProduct((10, 30, 0, 0), "ZTEX USB-XMEGA Module 1.0")

    def test_sub_family(self):
        self.assertProduct((10, 0, 1, 1), "ZTEX BTCMiner")
        self.assertProduct((10, 12, 2, 1), "NIT")
        self.assertProduct((10, 12, 2, 4), "NIT")
        self.assertProduct((10, 12, 2, 5), "ZTEX USB-FPGA Module 1.11")
        self.assertProduct((10, 12, 0, 0), "ZTEX USB-FPGA Module 1.11")

    def test_generic(self):
        self.assertProduct((10, 0, 0, 0), "ZTEX")
        self.assertProduct((10, 99, 1, 1), "ZTEX")
        self.assertProduct((10, 0, 1, 2), "ZTEX")

    def test_unknown(self):
        self.assertIsNone(product_by_id((0, 0, 0, 1)))
        self.assertIsNone(product_by_id((2, 0, 0, 0)))
        self.assertIsNone(product_by_id(b"\xff\xff\xff\xff"))


class TableTestCase(unittest.TestCase):
    def test_lookup_does_not_grow(self):
        size = len(fpga_parts)
        self.assertIsNone(fpga_parts.get(200))
        self.assertEqual(len(fpga_parts), size)

    def test_entries(self):
        self.assertEqual(fpga_parts[13].description, "Xilinx Spartan-6 XC6SLX150 x 4")
        self.assertEqual(board_types[2],
                         "ZTEX USB-FPGA Module (Cypress CY7C68013A EZ-USB FX2)")
        self.assertEqual(ram_types[10], "DDR3-800 SDRAM")
