import struct

from ztex.device.capability import CapabilitySet


def descriptor_bytes(capabilities=(), product=(10, 17, 0, 0), firmware=3, interface=1,
                     serial=b"04A32DB2\x00\x00", module=bytes(range(12)),
                     size=40, version=1, magic=b"ZTEX"):
    return struct.pack("<BB4s4sBB6s12s10s", size, version, magic, bytes(product),
                       firmware, interface,
                       bytes(CapabilitySet.from_capabilities(capabilities)),
                       module, serial)


def configuration_bytes(signature=b"CD0"):
    data = bytearray(128)
    data[0:3]   = signature
    data[3:8]   = b"\x02\x02\x0d\x62\x00"        # FX2 module 2.13b
    data[8:14]  = b"\x08\x00\x02\x32\x43\x00"    # XC7A35T, CSG324, grade 2C
    data[14:16] = b"\x21\x0a"                    # 4 MiB of DDR3-800
    data[16:26] = b"\xa5" * 10
    data[26:32] = b"\x10\x00\x40\x00\x00\x01"    # 16, 64 sectors at sector 256
    data[32:]   = bytes(range(96))
    return bytes(data)


class FakeTransport:
    def __init__(self, responses=None, written=0):
        self.responses = dict(responses or {})
        self.written   = written
        self.reads     = []
        self.writes    = []

    def control_read(self, request_type, request, value, index, length):
        self.reads.append((request_type, request, value, index, length))
        response = self.responses[request]
        if isinstance(response, Exception):
            raise response
        return response

    def control_write(self, request_type, request, value, index, data):
        self.writes.append((request_type, request, value, index, bytes(data)))
        return self.written
