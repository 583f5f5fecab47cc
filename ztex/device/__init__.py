__all__ = [
    "VID_ZTEX", "PID_ZTEX",
    "ZtexDeviceError",
    "MalformedDescriptor", "MalformedLength", "MalformedHeader", "SignatureMismatch",
    "UnsupportedOperation", "UnexpectedResponseLength", "TransportFailure",
]


VID_ZTEX = 0x221A
PID_ZTEX = 0x0100


class ZtexDeviceError(Exception):
    """An exception raised on a communication or decoding error."""


class MalformedDescriptor(ZtexDeviceError):
    """A buffer returned by the device cannot be decoded."""


class MalformedLength(MalformedDescriptor):
    def __init__(self, what, expected, observed):
        self.what     = what
        self.expected = expected
        self.observed = observed
        if isinstance(expected, int):
            expected = "{} bytes".format(expected)
        super().__init__("{}: got {} bytes, want {}".format(what, observed, expected))


class MalformedHeader(MalformedDescriptor):
    def __init__(self, field, expected, observed):
        self.field    = field
        self.expected = expected
        self.observed = observed
        super().__init__("descriptor {}: got {}, want {}".format(field, observed, expected))


class SignatureMismatch(MalformedDescriptor):
    def __init__(self, expected, observed):
        self.expected = bytes(expected)
        self.observed = bytes(observed)
        super().__init__("got signature {} ({}), want signature {} ({})"
                         .format(self.observed, self.observed.hex(),
                                 self.expected, self.expected.hex()))


class UnsupportedOperation(ZtexDeviceError):
    def __init__(self, operation, capability=None, reason=None):
        self.operation  = operation
        self.capability = capability
        if reason is not None:
            super().__init__("{}: operation not supported ({})".format(operation, reason))
        elif capability is None:
            super().__init__("{}: operation not supported".format(operation))
        else:
            super().__init__("{}: operation not supported (device lacks {} capability)"
                             .format(operation, capability.label))


class UnexpectedResponseLength(ZtexDeviceError):
    def __init__(self, operation, expected, observed):
        self.operation = operation
        self.expected  = expected
        self.observed  = observed
        super().__init__("{}: got {} bytes, want {} bytes".format(operation, observed, expected))


class TransportFailure(ZtexDeviceError):
    """The control transfer itself failed; the cause is chained."""
