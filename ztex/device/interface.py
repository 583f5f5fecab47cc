from collections import namedtuple

from . import MalformedLength


__all__ = ["HighSpeedConfigEndpoint", "DefaultInterfaceInfo"]


class HighSpeedConfigEndpoint(namedtuple("HighSpeedConfigEndpoint", ("endpoint", "interface"))):
    """
    Endpoint settings for high-speed FPGA configuration, returned by vendor request 0x33.
    0 in either field means high-speed configuration is not available.
    """
    __slots__ = ()

    SIZE = 2

    @classmethod
    def decode(cls, data):
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise MalformedLength("high-speed configuration endpoint", cls.SIZE, len(data))
        return cls(endpoint=data[0], interface=data[1])

    @property
    def available(self):
        return self.endpoint != 0 and self.interface != 0

    def __str__(self):
        return "Endpoint({}), Interface({})".format(self.endpoint, self.interface)


class DefaultInterfaceInfo(namedtuple("DefaultInterfaceInfo", (
        "major_version", "minor_version", "out_endpoint", "in_endpoint"))):
    """
    Default firmware interface information, returned by vendor request 0x64.

    Older firmware returns 3 bytes and has no minor version; it is reported as 0.
    """
    __slots__ = ()

    MIN_SIZE = 3
    MAX_SIZE = 4

    @classmethod
    def decode(cls, data):
        data = bytes(data)
        if not cls.MIN_SIZE <= len(data) <= cls.MAX_SIZE:
            raise MalformedLength("default interface information",
                                  "{} or {} bytes".format(cls.MIN_SIZE, cls.MAX_SIZE), len(data))
        return cls(major_version=data[0],
                   minor_version=data[3] if len(data) == 4 else 0,
                   out_endpoint=data[1] & 0x7F,
                   in_endpoint=data[2] | 0x80)

    @property
    def version(self):
        return "{}.{}".format(self.major_version, self.minor_version)

    def __str__(self):
        return "Version({}), Out({:#04x}), In({:#04x})".format(
            self.version, self.out_endpoint, self.in_endpoint)
