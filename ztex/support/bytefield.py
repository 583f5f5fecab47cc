__all__ = ["unpack_le", "pack_le", "ZeroPaddedBytes"]


def unpack_le(data):
    """Decode ``data`` as an unsigned little-endian integer."""
    return int.from_bytes(bytes(data), byteorder="little")


def pack_le(value, width):
    """Encode ``value`` as a ``width``-byte unsigned little-endian integer."""
    return value.to_bytes(width, byteorder="little")


class ZeroPaddedBytes:
    """
    A fixed-size byte field whose content ends at the first zero byte.

    Board variants, FPGA speed grades and serial numbers are stored this way: a board
    variant ``b`` is stored as ``62 00``, and no variant at all as ``00 00``. The raw bytes
    are kept as they were received; only :attr:`value` and :meth:`__str__` apply the
    truncation.

    :ivar bytes raw:
        Untruncated field contents.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw, size=None):
        raw = bytes(raw)
        if size is not None and len(raw) != size:
            raise ValueError("field requires {} bytes, got {} bytes ({})"
                             .format(size, len(raw), raw.hex()))
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name, value):
        raise AttributeError("{} is immutable".format(self.__class__.__name__))

    @property
    def raw(self):
        return self._raw

    @property
    def size(self):
        return len(self._raw)

    @property
    def length(self):
        """Effective length, i.e. the index of the first zero byte."""
        index = self._raw.find(b"\x00")
        return len(self._raw) if index == -1 else index

    @property
    def value(self):
        return self._raw[:self.length]

    def __bytes__(self):
        return self._raw

    def __len__(self):
        return self.length

    def __str__(self):
        return self.value.decode("ascii", errors="backslashreplace")

    def __repr__(self):
        return "{}({!r})".format(self.__class__.__name__, self._raw)

    def __eq__(self, other):
        return isinstance(other, ZeroPaddedBytes) and self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)
