import logging
import threading

from ..support.logging import dump_hex
from . import UnsupportedOperation, UnexpectedResponseLength
from .capability import Capability
from .descriptor import DeviceDescriptor
from .config import DeviceConfiguration
from .status import FPGAStatus, FlashStatus, convention_for_interface
from .interface import HighSpeedConfigEndpoint, DefaultInterfaceInfo


__all__ = ["ZtexDevice"]

logger = logging.getLogger(__name__)


REQUEST_TYPE_VENDOR_IN  = 0xC0
REQUEST_TYPE_VENDOR_OUT = 0x40

REQ_DESCRIPTOR          = 0x22
REQ_FPGA_STATUS         = 0x30
REQ_FPGA_RESET          = 0x31
REQ_HS_CONFIG_ENDPOINT  = 0x33
REQ_CONFIGURATION       = 0x3B
REQ_FLASH_STATUS        = 0x40
REQ_DEFAULT_RESET       = 0x60
REQ_DEFAULT_INFO        = 0x64
REQ_FX3_RESET           = 0xA1

FX3_RESET_BOOT_FLASH    = 1


class ZtexDevice:
    """
    A ZTEX module reached through ``transport``.

    ``transport`` issues vendor control requests; it must provide
    ``control_read(request_type, request, value, index, length) -> bytes`` and
    ``control_write(request_type, request, value, index, data) -> int``, the latter returning
    the number of bytes transferred, and raise :class:`TransportFailure` if a transfer fails.

    If ``descriptor`` is not given, it is read from the device, and so is the configuration
    block if the device has a MAC EEPROM. Operations that need a capability the descriptor
    does not advertise raise :class:`UnsupportedOperation` without issuing a request.

    ``convention`` selects how FPGA status is interpreted; by default it is looked up by
    the descriptor interface version.

    Requests issued through one :class:`ZtexDevice` are serialized. Do not share the
    underlying transport between several :class:`ZtexDevice` instances.
    """

    def __init__(self, transport, descriptor=None, configuration=None, *, convention=None):
        self._transport = transport
        self._lock      = threading.Lock()
        self.convention = convention

        if descriptor is None:
            descriptor = self.read_descriptor()
            if configuration is None and descriptor.capabilities.has(Capability.MAC_EEPROM):
                configuration = self.read_configuration()
        self.descriptor    = descriptor
        self.configuration = configuration

    def _control_read(self, operation, request, length, value=0, index=0):
        with self._lock:
            logger.trace("USB: CONTROL IN %s request=%#04x value=%#06x index=%#06x length=%d",
                         operation, request, value, index, length)
            data = self._transport.control_read(REQUEST_TYPE_VENDOR_IN, request,
                                                value, index, length)
            logger.trace("USB: CONTROL IN %s data=<%s>", operation, dump_hex(data))
        return bytes(data)

    def _control_write(self, operation, request, value=0, index=0):
        with self._lock:
            logger.trace("USB: CONTROL OUT %s request=%#04x value=%#06x index=%#06x",
                         operation, request, value, index)
            count = self._transport.control_write(REQUEST_TYPE_VENDOR_OUT, request,
                                                  value, index, b"")
            logger.trace("USB: CONTROL OUT %s length=%d", operation, count)
        if count != 0:
            raise UnexpectedResponseLength(operation, 0, count)

    def _require(self, capability, operation):
        if not self.descriptor.capabilities.has(capability):
            logger.debug("%s: refusing, device lacks %s capability", operation, capability.label)
            raise UnsupportedOperation(operation, capability)

    def has_capability(self, capability):
        return self.descriptor.capabilities.has(capability)

    def read_descriptor(self):
        """Read and decode the device descriptor."""
        data = self._control_read("read descriptor", REQ_DESCRIPTOR, DeviceDescriptor.SIZE)
        descriptor = DeviceDescriptor.decode(data)
        logger.debug("found %s with serial %s, firmware %d, interface %d",
                     descriptor.product_name, descriptor.serial,
                     descriptor.firmware_version, descriptor.interface_version)
        return descriptor

    def read_configuration(self):
        """Read and decode the configuration block stored in the MAC EEPROM."""
        data = self._control_read("read configuration", REQ_CONFIGURATION,
                                  DeviceConfiguration.SIZE)
        configuration = DeviceConfiguration.decode(data)
        logger.debug("board %s, FPGA %s", configuration.board.version,
                     configuration.fpga.part_name)
        return configuration

    def fpga_status(self, convention=None):
        """
        Query FPGA state.

        ``convention`` overrides the convention chosen when the device was created.
        """
        self._require(Capability.FPGA_CONFIGURATION, "get FPGA status")
        if convention is None:
            convention = self.convention
        if convention is None:
            convention = convention_for_interface(self.descriptor.interface_version)
        data = self._control_read("get FPGA status", REQ_FPGA_STATUS, FPGAStatus.SIZE)
        return FPGAStatus.decode(data, convention)

    def flash_status(self):
        """Query flash memory state."""
        self._require(Capability.FLASH_MEMORY, "get flash status")
        data = self._control_read("get flash status", REQ_FLASH_STATUS, FlashStatus.SIZE)
        return FlashStatus.decode(data)

    def high_speed_endpoint(self):
        """Query endpoint settings for high-speed FPGA configuration."""
        self._require(Capability.HIGH_SPEED_FPGA_CONFIGURATION,
                      "get high-speed configuration endpoint")
        data = self._control_read("get high-speed configuration endpoint",
                                  REQ_HS_CONFIG_ENDPOINT, HighSpeedConfigEndpoint.SIZE)
        return HighSpeedConfigEndpoint.decode(data)

    def default_interface(self):
        """Query default firmware interface information."""
        self._require(Capability.DEFAULT_FIRMWARE, "get default interface information")
        data = self._control_read("get default interface information",
                                  REQ_DEFAULT_INFO, DefaultInterfaceInfo.MAX_SIZE)
        return DefaultInterfaceInfo.decode(data)

    def reset_fpga(self):
        """Reset the FPGA, clearing its configuration."""
        self._require(Capability.FPGA_CONFIGURATION, "reset FPGA")
        logger.debug("resetting FPGA")
        self._control_write("reset FPGA", REQ_FPGA_RESET)

    def reset_fx3(self):
        """Reset the EZ-USB FX3S controller and boot it from flash."""
        self._require(Capability.FX3_FIRMWARE, "reset FX3")
        logger.debug("resetting FX3 controller")
        self._control_write("reset FX3", REQ_FX3_RESET, value=FX3_RESET_BOOT_FLASH)

    def reset_default_firmware(self):
        """Reset the default firmware interface."""
        self._require(Capability.DEFAULT_FIRMWARE, "reset default firmware")
        logger.debug("resetting default firmware interface")
        self._control_write("reset default firmware", REQ_DEFAULT_RESET)

    def __str__(self):
        fields = ["Descriptor({})".format(self.descriptor)]
        if self.configuration is not None:
            fields += [
                "Board({})".format(self.configuration.board),
                "FPGA({})".format(self.configuration.fpga),
                "RAM({})".format(self.configuration.ram),
                "Bitstream({})".format(self.configuration.bitstream),
            ]
        return ", ".join(fields)
