import enum


__all__ = ["Capability", "CapabilitySet", "has_flag"]


class Capability(enum.Enum):
    EEPROM                          = "eeprom"
    FPGA_CONFIGURATION              = "fpga-configuration"
    FLASH_MEMORY                    = "flash-memory"
    DEBUG_HELPER                    = "debug-helper"
    XMEGA                           = "xmega"
    HIGH_SPEED_FPGA_CONFIGURATION   = "high-speed-fpga-configuration"
    MAC_EEPROM                      = "mac-eeprom"
    MULTI_FPGA                      = "multi-fpga"
    TEMPERATURE_SENSOR              = "temperature-sensor"
    FLASH_MEMORY_2                  = "flash-memory-2"
    FX3_FIRMWARE                    = "fx3-firmware"
    DEBUG_HELPER_2                  = "debug-helper-2"
    DEFAULT_FIRMWARE                = "default-firmware"

    @property
    def position(self):
        """``(byte_index, bit_index)`` of this capability in the capability field."""
        byte_index, bit_index, _ = _CAPABILITY_TABLE[self]
        return byte_index, bit_index

    @property
    def label(self):
        return _CAPABILITY_TABLE[self][2]


# The bit position is the identity of a capability. Positions are never reused; new
# capabilities are appended.
_CAPABILITY_TABLE = {
    Capability.EEPROM:                        (0, 0, "EEPROM"),
    Capability.FPGA_CONFIGURATION:            (0, 1, "FPGA Configuration"),
    Capability.FLASH_MEMORY:                  (0, 2, "Flash Memory"),
    Capability.DEBUG_HELPER:                  (0, 3, "Debug Helper"),
    Capability.XMEGA:                         (0, 4, "XMEGA"),
    Capability.HIGH_SPEED_FPGA_CONFIGURATION: (0, 5, "High Speed FPGA Configuration"),
    Capability.MAC_EEPROM:                    (0, 6, "MAC EEPROM"),
    Capability.MULTI_FPGA:                    (0, 7, "MultiFPGA"),
    Capability.TEMPERATURE_SENSOR:            (1, 0, "Temperature Sensor"),
    Capability.FLASH_MEMORY_2:                (1, 1, "Flash Memory 2"),
    Capability.FX3_FIRMWARE:                  (1, 2, "FX3 Firmware"),
    Capability.DEBUG_HELPER_2:                (1, 3, "Debug Helper 2"),
    Capability.DEFAULT_FIRMWARE:              (1, 4, "Default Firmware"),
}


class CapabilitySet:
    """
    Capabilities advertised in a device descriptor.

    The capability field is 6 bytes long; only the first two carry defined capabilities,
    the rest are kept so that the descriptor re-encodes unchanged.
    """
    size = 6

    __slots__ = ("_raw",)

    def __init__(self, raw=bytes(6)):
        raw = bytes(raw)
        if len(raw) != self.size:
            raise ValueError("capability field requires {} bytes, got {} bytes ({})"
                             .format(self.size, len(raw), raw.hex()))
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name, value):
        raise AttributeError("{} is immutable".format(self.__class__.__name__))

    @classmethod
    def from_capabilities(cls, capabilities):
        raw = bytearray(cls.size)
        for capability in capabilities:
            byte_index, bit_index = capability.position
            raw[byte_index] |= 1 << bit_index
        return cls(raw)

    def has(self, capability):
        byte_index, bit_index = capability.position
        return bool(self._raw[byte_index] & (1 << bit_index))

    __contains__ = has

    def __iter__(self):
        return (capability for capability in Capability if self.has(capability))

    def __bytes__(self):
        return self._raw

    def __eq__(self, other):
        return isinstance(other, CapabilitySet) and self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)

    def __str__(self):
        return ", ".join("{}({})".format(capability.label, self.has(capability))
                         for capability in Capability)

    def __repr__(self):
        return "<{}.{} {}>".format(self.__module__, self.__class__.__name__,
                                   " ".join(capability.value for capability in self) or "none")


def has_flag(capabilities, capability):
    """Return ``True`` if ``capability`` is set in ``capabilities``."""
    return capabilities.has(capability)
