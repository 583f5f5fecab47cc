import struct
from collections import namedtuple

from ..support.binary_prefix import binary_prefix
from ..support.bytefield import ZeroPaddedBytes
from ..database.ztex import UNKNOWN, board_types, board_series, fpga_parts, fpga_packages, \
    ram_types
from . import MalformedLength, SignatureMismatch


__all__ = [
    "BoardIdentity", "FPGAIdentity", "RAMConfiguration", "BitstreamLayout",
    "DeviceConfiguration",
]


class BoardIdentity(namedtuple("BoardIdentity", ("board_type", "series", "number", "variant"))):
    """
    Board type and version, e.g. 2.13b.

    :ivar int board_type:
        1 for FPGA modules, 2 for FX2-based and 3 for FX3-based USB-FPGA modules.

    :ivar int series:
        Board series (generation).

    :ivar int number:
        Board number within the series, 255 if unknown.

    :ivar ZeroPaddedBytes variant:
        Board variant letters, 2 bytes, zero-padded.
    """
    __slots__ = ()

    size = 5
    _encoding = "<BBB2s"

    @classmethod
    def decode(cls, data):
        board_type, series, number, variant = struct.unpack(cls._encoding, data)
        return cls(board_type, series, number, ZeroPaddedBytes(variant, size=2))

    def encode(self):
        return struct.pack(self._encoding,
                           self.board_type, self.series, self.number, bytes(self.variant))

    @property
    def type_name(self):
        return board_types.get(self.board_type, UNKNOWN)

    @property
    def version(self):
        series = board_series.get(self.series, UNKNOWN)
        number = UNKNOWN if self.number == 255 else str(self.number)
        return "{}.{}{}".format(series, number, self.variant)

    def __str__(self):
        return "Type({}), Version({})".format(self.type_name, self.version)


class FPGAIdentity(namedtuple("FPGAIdentity", ("part_code", "package", "grade"))):
    """
    FPGA part, package and speed grade.

    :ivar int part_code:
        Part code; see :data:`ztex.database.ztex.fpga_parts`.

    :ivar int package:
        Package code; see :data:`ztex.database.ztex.fpga_packages`.

    :ivar ZeroPaddedBytes grade:
        Speed grade, operating voltage and temperature range suffix, e.g. ``2C``. 3 bytes,
        zero-padded.
    """
    __slots__ = ()

    size = 6
    _encoding = "<HB3s"

    @classmethod
    def decode(cls, data):
        part_code, package, grade = struct.unpack(cls._encoding, data)
        return cls(part_code, package, ZeroPaddedBytes(grade, size=3))

    def encode(self):
        return struct.pack(self._encoding, self.part_code, self.package, bytes(self.grade))

    @property
    def part(self):
        return fpga_parts.get(self.part_code)

    @property
    def part_name(self):
        part = self.part
        if part is None:
            return UNKNOWN
        return "{} [{}]".format(part.name, part.description)

    @property
    def package_name(self):
        return fpga_packages.get(self.package, UNKNOWN)

    def __str__(self):
        return "Type({}), Package({}), Grade({})".format(
            self.part_name, self.package_name, self.grade)


class RAMConfiguration(namedtuple("RAMConfiguration", ("size_code", "ram_type"))):
    """
    On-board RAM.

    :ivar int size_code:
        Encoded size: the high nibble is the mantissa (already shifted by 4) and the low
        nibble the exponent; the size is ``(code & 0xF0) << ((code & 0x0F) + 16)`` bytes.

    :ivar int ram_type:
        RAM type code; see :data:`ztex.database.ztex.ram_types`.
    """
    __slots__ = ()

    size = 2
    _encoding = "<BB"

    @classmethod
    def decode(cls, data):
        return cls(*struct.unpack(cls._encoding, data))

    def encode(self):
        return struct.pack(self._encoding, self.size_code, self.ram_type)

    @property
    def capacity(self):
        """RAM size in bytes."""
        return (self.size_code & 0xF0) << ((self.size_code & 0x0F) + 16)

    @property
    def type_name(self):
        return ram_types.get(self.ram_type, UNKNOWN)

    def __str__(self):
        return "Size({}), Type({})".format(binary_prefix(self.capacity, "B"), self.type_name)


class BitstreamLayout(namedtuple("BitstreamLayout",
                                 ("size_sectors", "capacity_sectors", "start_sectors"))):
    """
    Location of the FPGA bitstream in flash, counted in 4 KiB sectors.

    :ivar int size_sectors:
        Actual bitstream size.

    :ivar int capacity_sectors:
        Space reserved for the bitstream.

    :ivar int start_sectors:
        Start of the bitstream.
    """
    __slots__ = ()

    size = 6
    sector_size = 4096
    _encoding = "<3H"

    @classmethod
    def decode(cls, data):
        return cls(*struct.unpack(cls._encoding, data))

    def encode(self):
        return struct.pack(self._encoding,
                           self.size_sectors, self.capacity_sectors, self.start_sectors)

    @property
    def bitstream_size(self):
        return self.size_sectors << 12

    @property
    def bitstream_capacity(self):
        return self.capacity_sectors << 12

    @property
    def bitstream_start(self):
        return self.start_sectors << 12

    def __str__(self):
        return "Size({}), Capacity({}), Start({})".format(
            binary_prefix(self.bitstream_size, "B"),
            binary_prefix(self.bitstream_capacity, "B"),
            binary_prefix(self.bitstream_start, "B"))


class DeviceConfiguration(namedtuple("DeviceConfiguration",
                                     ("board", "fpga", "ram", "bitstream", "raw"))):
    """
    ZTEX extended configuration data, read from the MAC EEPROM with vendor request 0x3B.

    :ivar BoardIdentity board:
    :ivar FPGAIdentity fpga:
    :ivar RAMConfiguration ram:
    :ivar BitstreamLayout bitstream:

    :ivar bytes[128] raw:
        The whole configuration block, including the fields that are not interpreted.
    """
    __slots__ = ()

    SIZE      = 128
    SIGNATURE = b"CD0"

    _BOARD_OFFSET     = 3
    _FPGA_OFFSET      = 8
    _RAM_OFFSET       = 14
    _BITSTREAM_OFFSET = 26

    @staticmethod
    def _field(data, offset, field_cls):
        return field_cls.decode(data[offset:offset + field_cls.size])

    @classmethod
    def decode(cls, data):
        """
        Parse configuration from the 128-byte block returned by the device.

        Raises :class:`MalformedLength` if ``data`` has the wrong length, or
        :class:`SignatureMismatch` if it does not start with ``CD0``.
        """
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise MalformedLength("device configuration", cls.SIZE, len(data))
        if data[:len(cls.SIGNATURE)] != cls.SIGNATURE:
            raise SignatureMismatch(cls.SIGNATURE, data[:len(cls.SIGNATURE)])

        return cls(board=cls._field(data, cls._BOARD_OFFSET, BoardIdentity),
                   fpga=cls._field(data, cls._FPGA_OFFSET, FPGAIdentity),
                   ram=cls._field(data, cls._RAM_OFFSET, RAMConfiguration),
                   bitstream=cls._field(data, cls._BITSTREAM_OFFSET, BitstreamLayout),
                   raw=data)

    @classmethod
    def build(cls, board, fpga, ram, bitstream):
        """Create a configuration with all uninterpreted bytes set to zero."""
        raw = cls.SIGNATURE.ljust(cls.SIZE, b"\x00")
        return cls(board, fpga, ram, bitstream, raw)

    def encode(self):
        """
        Convert configuration to the 128-byte block format, keeping uninterpreted bytes
        from :attr:`raw`.
        """
        data = bytearray(self.raw)
        for offset, field in ((self._BOARD_OFFSET,     self.board),
                              (self._FPGA_OFFSET,      self.fpga),
                              (self._RAM_OFFSET,       self.ram),
                              (self._BITSTREAM_OFFSET, self.bitstream)):
            data[offset:offset + field.size] = field.encode()
        return bytes(data)

    def __str__(self):
        return "Board({}), FPGA({}), RAM({}), Bitstream({})".format(
            self.board, self.fpga, self.ram, self.bitstream)
