__all__ = ["dump_hex"]


class _deferred:
    __slots__ = ("_thunk",)

    def __init__(self, thunk):
        self._thunk = thunk

    def __str__(self):
        return self._thunk()

    def __repr__(self):
        return "<deferred {!r}>".format(self._thunk)


def dump_hex(data):
    """
    Format ``data`` as hex for a log message, only once the message is actually emitted.

    Dumps longer than ``dump_hex.limit`` bytes are shortened; set the limit to ``None`` to
    always dump everything.
    """
    def to_hex():
        try:
            view = memoryview(data)
        except TypeError:
            view = memoryview(bytes(data))
        if dump_hex.limit is None or len(view) < dump_hex.limit:
            return view.hex()
        else:
            return "{}... ({} bytes total)".format(view[:dump_hex.limit].hex(), len(view))
    return _deferred(to_hex)

dump_hex.limit = 64
