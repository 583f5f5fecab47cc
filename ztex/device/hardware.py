import logging
import usb1

from . import VID_ZTEX, PID_ZTEX, ZtexDeviceError, TransportFailure


__all__ = ["ZtexHardwareDevice"]

logger = logging.getLogger(__name__)


CONTROL_TIMEOUT = 1.0


class ZtexHardwareDevice:
    """
    A control request transport for the first ZTEX module found on the bus.

    Opening the device does not communicate with it; wrap it in :class:`ZtexDevice` for that.
    """

    def __init__(self, vid=VID_ZTEX, pid=PID_ZTEX, *, timeout=CONTROL_TIMEOUT):
        self.timeout  = timeout
        self._context = usb1.USBContext()
        try:
            self._handle = self._context.openByVendorIDAndProductID(vid, pid)
        except usb1.USBError as e:
            self._context.close()
            raise TransportFailure("cannot open device {:04x}:{:04x}: {}"
                                   .format(vid, pid, e)) from e
        if self._handle is None:
            self._context.close()
            raise ZtexDeviceError("device {:04x}:{:04x} not found".format(vid, pid))
        logger.debug("opened device %04x:%04x", vid, pid)

        try:
            self._handle.setAutoDetachKernelDriver(True)
        except usb1.USBErrorNotSupported:
            pass
        except usb1.USBError as e:
            self.close()
            raise TransportFailure("cannot detach kernel driver from device {:04x}:{:04x}: {}"
                                   .format(vid, pid, e)) from e

    def close(self):
        self._handle.close()
        self._context.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def _timeout_ms(self):
        return round(self.timeout * 1000)

    def control_read(self, request_type, request, value, index, length):
        try:
            return bytes(self._handle.controlRead(request_type, request, value, index, length,
                                                  timeout=self._timeout_ms))
        except usb1.USBError as e:
            raise TransportFailure("control request {:#04x} failed: {}"
                                   .format(request, e)) from e

    def control_write(self, request_type, request, value, index, data):
        if not isinstance(data, (bytes, bytearray)):
            data = bytes(data)
        try:
            return self._handle.controlWrite(request_type, request, value, index, data,
                                             timeout=self._timeout_ms)
        except usb1.USBError as e:
            raise TransportFailure("control request {:#04x} failed: {}"
                                   .format(request, e)) from e
