import enum
import struct
from collections import namedtuple

from ..support.binary_prefix import binary_prefix
from . import MalformedLength, UnsupportedOperation


__all__ = [
    "ConfiguredPolarity", "ResultScheme", "FirmwareConvention",
    "LEGACY_CONVENTION", "CURRENT_CONVENTION", "conventions", "convention_for_interface",
    "FPGAResult", "FPGAStatus",
    "FlashError", "FlashStatus", "decode_sector_size",
]


class ConfiguredPolarity(enum.Enum):
    """Which value of the FPGA status "configured" byte means that the FPGA is configured."""
    ZERO_IS_CONFIGURED = 0
    ONE_IS_CONFIGURED  = 1


class ResultScheme(enum.Enum):
    """How the FPGA status result code is interpreted."""
    # 0 is success, anything else is a failure of some unspecified kind.
    BASIC    = "basic"
    # 0 is success, 1-4 are distinct failure reasons.
    EXTENDED = "extended"


FirmwareConvention = namedtuple("FirmwareConvention", ("name", "polarity", "result_scheme"))

LEGACY_CONVENTION  = FirmwareConvention("legacy",  ConfiguredPolarity.ONE_IS_CONFIGURED,
                                        ResultScheme.BASIC)
CURRENT_CONVENTION = FirmwareConvention("current", ConfiguredPolarity.ZERO_IS_CONFIGURED,
                                        ResultScheme.EXTENDED)

conventions = {
    LEGACY_CONVENTION.name:  LEGACY_CONVENTION,
    CURRENT_CONVENTION.name: CURRENT_CONVENTION,
}

# Descriptor interface versions whose FPGA status convention is known. Firmware reporting
# any other interface version must be given a convention explicitly. Released firmware with
# interface version 1 reports 1 for a configured FPGA and leaves failure codes unnamed.
_conventions_by_interface = {
    1: LEGACY_CONVENTION,
}


def convention_for_interface(interface_version):
    """
    Return the :class:`FirmwareConvention` for firmware with the given descriptor interface
    version.

    Raises :class:`UnsupportedOperation` if the convention of this interface version is not
    known; the caller has to choose one explicitly then.
    """
    try:
        return _conventions_by_interface[interface_version]
    except KeyError:
        raise UnsupportedOperation("get FPGA status", reason="unknown interface version {}, "
                                   "convention must be specified explicitly"
                                   .format(interface_version)) from None


class FPGAResult(enum.IntEnum):
    SUCCESS             = 0
    ALREADY_CONFIGURED  = 1
    FLASH_ERROR         = 2
    NO_BITSTREAM        = 3
    CONFIGURATION_ERROR = 4


_fpga_result_names = {
    FPGAResult.SUCCESS:             "Successful",
    FPGAResult.ALREADY_CONFIGURED:  "Already Configured",
    FPGAResult.FLASH_ERROR:         "Flash Error",
    FPGAResult.NO_BITSTREAM:        "No Bitstream",
    FPGAResult.CONFIGURATION_ERROR: "Configuration Error",
}


class FPGAStatus(namedtuple("FPGAStatus", (
        "configured_raw", "checksum", "transferred", "init_pulses", "result_code",
        "swapped_raw", "convention"))):
    """
    FPGA state, returned by vendor request 0x30.

    :ivar int configured_raw:
        Raw "configured" byte; its meaning depends on :attr:`convention`.

    :ivar int checksum:
        Checksum of the bitstream transferred.

    :ivar int transferred:
        Number of bitstream bytes transferred.

    :ivar int init_pulses:
        Number of INIT_B pulses seen during configuration.

    :ivar int result_code:
        Result of the previous configuration attempt; see :attr:`result`.

    :ivar int swapped_raw:
        1 if the bitstream bit order is swapped.

    :ivar FirmwareConvention convention:
        Convention the status was decoded with.
    """
    __slots__ = ()

    SIZE = 9
    _encoding = "<BBIBBB"

    @classmethod
    def decode(cls, data, convention):
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise MalformedLength("FPGA status", cls.SIZE, len(data))
        return cls(*struct.unpack(cls._encoding, data), convention=convention)

    def encode(self):
        return struct.pack(self._encoding,
                           self.configured_raw,
                           self.checksum,
                           self.transferred,
                           self.init_pulses,
                           self.result_code,
                           self.swapped_raw)

    @property
    def configured(self):
        if self.convention.polarity == ConfiguredPolarity.ZERO_IS_CONFIGURED:
            return self.configured_raw == 0
        else:
            return self.configured_raw == 1

    @property
    def swapped(self):
        return self.swapped_raw == 1

    @property
    def successful(self):
        return self.result_code == FPGAResult.SUCCESS

    @property
    def result(self):
        """
        :class:`FPGAResult` of the previous configuration attempt, or ``None`` if the result
        code has no defined meaning under :attr:`convention`.
        """
        if self.result_code == FPGAResult.SUCCESS:
            return FPGAResult.SUCCESS
        if self.convention.result_scheme == ResultScheme.EXTENDED:
            try:
                return FPGAResult(self.result_code)
            except ValueError:
                pass
        return None

    @property
    def result_name(self):
        result = self.result
        if result is not None:
            return _fpga_result_names[result]
        if self.convention.result_scheme == ResultScheme.BASIC:
            return "Not Successful [{}]".format(self.result_code)
        return "Unknown Result [{}]".format(self.result_code)

    def __str__(self):
        if self.configured_raw in (0, 1):
            configured = "Configured" if self.configured else "Unconfigured"
        else:
            configured = "Unknown [{}]".format(self.configured_raw)
        if self.swapped_raw in (0, 1):
            swapped = "Swapped" if self.swapped else "Unswapped"
        else:
            swapped = "Unknown [{}]".format(self.swapped_raw)
        return ", ".join([
            "Configured({})".format(configured),
            "Checksum({:#04x})".format(self.checksum),
            "Transferred({})".format(binary_prefix(self.transferred, "B")),
            "Init({})".format(self.init_pulses),
            "Result({})".format(self.result_name),
            "Swapped({})".format(swapped),
            "Convention({})".format(self.convention.name),
        ])


class FlashError(enum.IntEnum):
    NONE        = 0
    COMMAND     = 1
    TIMEOUT     = 2
    BUSY        = 3
    PENDING     = 4
    READ        = 5
    WRITE       = 6
    UNSUPPORTED = 7
    RUNTIME     = 8


def decode_sector_size(field):
    """
    Decode the 16-bit flash sector size field.

    If bit 15 is set, the low 15 bits are the base 2 logarithm of the sector size; otherwise
    they are the sector size in bytes.
    """
    if field & 0x8000:
        return 1 << (field & 0x7FFF)
    return field & 0x7FFF


class FlashStatus(namedtuple("FlashStatus", ("enabled_raw", "sector_field", "sector_count",
                                             "error_code"))):
    """
    Flash memory state, returned by vendor request 0x40.

    :ivar int enabled_raw:
        1 if flash memory is enabled.

    :ivar int sector_field:
        Encoded sector size; see :func:`decode_sector_size`.

    :ivar int sector_count:
        Number of sectors.

    :ivar int error_code:
        Last error; see :class:`FlashError`.
    """
    __slots__ = ()

    SIZE = 8
    _encoding = "<BHIB"

    @classmethod
    def decode(cls, data):
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise MalformedLength("flash status", cls.SIZE, len(data))
        return cls(*struct.unpack(cls._encoding, data))

    def encode(self):
        return struct.pack(self._encoding,
                           self.enabled_raw, self.sector_field, self.sector_count,
                           self.error_code)

    @property
    def enabled(self):
        return self.enabled_raw == 1

    @property
    def sector_size(self):
        return decode_sector_size(self.sector_field)

    @property
    def capacity(self):
        return self.sector_size * self.sector_count

    @property
    def error(self):
        """:class:`FlashError`, or ``None`` for codes without a defined meaning."""
        try:
            return FlashError(self.error_code)
        except ValueError:
            return None

    @property
    def error_name(self):
        error = self.error
        if error is None:
            return "Unknown Error [{}]".format(self.error_code)
        if error == FlashError.NONE:
            return "None"
        return "{} Error".format(error.name.title())

    def __str__(self):
        if self.enabled_raw in (0, 1):
            enabled = "Enabled" if self.enabled else "Disabled"
        else:
            enabled = "Unknown [{}]".format(self.enabled_raw)
        return ", ".join([
            "Enabled({})".format(enabled),
            "Sector({})".format(binary_prefix(self.sector_size, "B")),
            "Count({})".format(self.sector_count),
            "Error({})".format(self.error_name),
        ])
