from collections import defaultdict, namedtuple


__all__ = [
    "UNKNOWN",
    "products", "product_by_id",
    "board_types", "board_series",
    "fpga_parts", "fpga_packages",
    "ram_types",
]


UNKNOWN = "Unknown"


ZtexProduct = namedtuple("ZtexProduct", ("name", "prefix"))

# Matched by longest prefix of the 4-byte product ID. Firmware in the field reports these IDs,
# so entries may be added but never changed.
products = [
    ZtexProduct("Default",                    prefix=(0, 0, 0, 0)),
    ZtexProduct("Experimental",               prefix=(1,)),
    ZtexProduct("ZTEX BTCMiner",              prefix=(10, 0, 1, 1)),
    ZtexProduct("ZTEX USB-FPGA Module 1.2",   prefix=(10, 11)),
    ZtexProduct("NIT",                        prefix=(10, 12, 2, 1)),
    ZtexProduct("NIT",                        prefix=(10, 12, 2, 2)),
    ZtexProduct("NIT",                        prefix=(10, 12, 2, 3)),
    ZtexProduct("NIT",                        prefix=(10, 12, 2, 4)),
    ZtexProduct("ZTEX USB-FPGA Module 1.11",  prefix=(10, 12)),
    ZtexProduct("ZTEX USB-FPGA Module 1.15",  prefix=(10, 13)),
    ZtexProduct("ZTEX USB-FPGA Module 1.15x", prefix=(10, 14)),
    ZtexProduct("ZTEX USB-FPGA Module 1.15y", prefix=(10, 15)),
    ZtexProduct("ZTEX USB-FPGA Module 2.16",  prefix=(10, 16)),
    ZtexProduct("ZTEX USB-FPGA Module 2.13",  prefix=(10, 17)),
    ZtexProduct("ZTEX USB-FPGA Module 2.01",  prefix=(10, 18)),
    ZtexProduct("ZTEX USB-FPGA Module 2.04",  prefix=(10, 19)),
    ZtexProduct("ZTEX USB Module 1.0",        prefix=(10, 20)),
    ZtexProduct("ZTEX USB-XMEGA Module 1.0",  prefix=(10, 30)),
    ZtexProduct("ZTEX USB-FPGA Module 2.02",  prefix=(10, 40)),
    ZtexProduct("ZTEX USB-FPGA Module 2.14",  prefix=(10, 41)),
    ZtexProduct("ZTEX USB3-FPGA Module 2.18", prefix=(10, 42)),
    ZtexProduct("ZTEX",                       prefix=(10,)),
]

_products_longest_first = sorted(products, key=lambda product: len(product.prefix),
                                 reverse=True)


def product_by_id(product_id):
    """Return the :class:`ZtexProduct` matching the 4-byte ``product_id``, or ``None``."""
    product_id = tuple(product_id)
    for product in _products_longest_first:
        if product_id[:len(product.prefix)] == product.prefix:
            return product
    return None


board_types = defaultdict(lambda: None, {
    1: "ZTEX FPGA Module",
    2: "ZTEX USB-FPGA Module (Cypress CY7C68013A EZ-USB FX2)",
    3: "ZTEX USB3-FPGA Module (Cypress CYUSB3033 EZ-USB FX3S)",
})

board_series = defaultdict(lambda: None, {
    1: "1",
    2: "2",
})


FPGAPart = namedtuple("FPGAPart", ("name", "description"))


fpga_parts = defaultdict(lambda: None, {
    1:  FPGAPart("XC6SLX9",   "Xilinx Spartan-6 XC6SLX9"),
    2:  FPGAPart("XC6SLX16",  "Xilinx Spartan-6 XC6SLX16"),
    3:  FPGAPart("XC6SLX25",  "Xilinx Spartan-6 XC6SLX25"),
    4:  FPGAPart("XC6SLX45",  "Xilinx Spartan-6 XC6SLX45"),
    5:  FPGAPart("XC6SLX75",  "Xilinx Spartan-6 XC6SLX75"),
    6:  FPGAPart("XC6SLX100", "Xilinx Spartan-6 XC6SLX100"),
    7:  FPGAPart("XC6SLX150", "Xilinx Spartan-6 XC6SLX150"),
    8:  FPGAPart("XC7A35T",   "Xilinx Artix-7 XC7A35T"),
    9:  FPGAPart("XC7A50T",   "Xilinx Artix-7 XC7A50T"),
    10: FPGAPart("XC7A75T",   "Xilinx Artix-7 XC7A75T"),
    11: FPGAPart("XC7A100T",  "Xilinx Artix-7 XC7A100T"),
    12: FPGAPart("XC7A200T",  "Xilinx Artix-7 XC7A200T"),
    13: FPGAPart("XC6SLX150", "Xilinx Spartan-6 XC6SLX150 x 4"),
    14: FPGAPart("XC7A15T",   "Xilinx Artix-7 XC7A15T"),
})

fpga_packages = defaultdict(lambda: None, {
    1: "FTG256",
    2: "CSG324",
    3: "CSG484",
    4: "FBG484",
})


ram_types = defaultdict(lambda: None, {
    1:  "DDR-200 SDRAM",
    2:  "DDR-266 SDRAM",
    3:  "DDR-333 SDRAM",
    4:  "DDR-400 SDRAM",
    5:  "DDR2-400 SDRAM",
    6:  "DDR2-533 SDRAM",
    7:  "DDR2-667 SDRAM",
    8:  "DDR2-800 SDRAM",
    9:  "DDR2-1066 SDRAM",
    10: "DDR3-800 SDRAM",
})
