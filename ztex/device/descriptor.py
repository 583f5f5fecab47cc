import struct
from collections import namedtuple

from ..support.bytefield import ZeroPaddedBytes
from ..database.ztex import UNKNOWN, product_by_id
from . import MalformedLength, MalformedHeader
from .capability import CapabilitySet


__all__ = ["DeviceDescriptor", "format_product_id"]


def format_product_id(product_id):
    """Render a 4-byte product ID as ``a.b.c.d [Name]``."""
    product = product_by_id(product_id)
    return "{}.{}.{}.{} [{}]".format(*product_id, UNKNOWN if product is None else product.name)


class DeviceDescriptor(namedtuple("DeviceDescriptor", (
        "size", "version", "magic", "product_id", "firmware_version", "interface_version",
        "capabilities", "module", "serial"))):
    """
    ZTEX device descriptor, returned by vendor request 0x22.

    :ivar int size:
        Declared descriptor size; always 40.

    :ivar int version:
        Declared descriptor version; always 1.

    :ivar bytes[4] magic:
        Descriptor magic, ``ZTEX`` on genuine firmware.

    :ivar bytes[4] product_id:
        Product ID; see :func:`ztex.database.ztex.product_by_id`.

    :ivar int firmware_version:
        Firmware version.

    :ivar int interface_version:
        Firmware interface version.

    :ivar CapabilitySet capabilities:
        Capabilities supported by the firmware.

    :ivar bytes[12] module:
        Product specific configuration, not interpreted.

    :ivar ZeroPaddedBytes serial:
        Serial number, 10 bytes, zero-padded.
    """
    __slots__ = ()

    SIZE     = 40
    VERSION  = 1
    _encoding = "<BB4s4sBB6s12s10s"

    @classmethod
    def decode(cls, data):
        """
        Parse a device descriptor.

        Raises :class:`MalformedLength` if ``data`` is not 40 bytes long, and
        :class:`MalformedHeader` if the declared size or version is not supported.
        """
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise MalformedLength("device descriptor", cls.SIZE, len(data))
        if data[0] != cls.SIZE:
            raise MalformedHeader("size", cls.SIZE, data[0])
        if data[1] != cls.VERSION:
            raise MalformedHeader("version", cls.VERSION, data[1])

        size, version, magic, product_id, firmware_version, interface_version, \
            capabilities, module, serial = struct.unpack(cls._encoding, data)
        return cls(size, version, magic, product_id, firmware_version, interface_version,
                   CapabilitySet(capabilities), module, ZeroPaddedBytes(serial, size=10))

    def encode(self):
        """Convert the descriptor back to the 40 bytes it was decoded from."""
        return struct.pack(self._encoding,
                           self.size,
                           self.version,
                           self.magic,
                           self.product_id,
                           self.firmware_version,
                           self.interface_version,
                           bytes(self.capabilities),
                           self.module,
                           bytes(self.serial))

    @property
    def product(self):
        """Matching :class:`ZtexProduct`, or ``None`` if the product ID is not recognized."""
        return product_by_id(self.product_id)

    @property
    def product_name(self):
        product = self.product
        return UNKNOWN if product is None else product.name

    def __str__(self):
        return ", ".join([
            "Size({})".format(self.size),
            "Version({})".format(self.version),
            "Magic({})".format(self.magic.decode("ascii", errors="backslashreplace")),
            "Product({})".format(format_product_id(self.product_id)),
            "Firmware({})".format(self.firmware_version),
            "Interface({})".format(self.interface_version),
            "Capability({})".format(self.capabilities),
            "Module({})".format(self.module.hex()),
            "Serial({})".format(self.serial),
        ])
