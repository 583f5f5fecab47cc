__all__ = ["binary_prefix", "binary_prefix_split"]


_PREFIXES = [
    ( 3, "Gi", "Gibi" ),
    ( 2, "Mi", "Mebi" ),
    ( 1, "Ki", "Kibi" ),
]


def binary_prefix_split(num, long_prefix=False):
    """
    Split ``num`` into a scaled value and a binary prefix.

    Only a prefix that divides ``num`` exactly is chosen, so ``value * 1024 ** factor == num``
    always holds. Zero and numbers that are not a multiple of 1024 get an empty prefix.

    Returns ``(value, factor, prefix)``.
    """
    if not isinstance(num, int) or num < 0:
        raise ValueError("cannot format {!r} as a byte count".format(num))
    for factor, tshort, tlong in _PREFIXES:
        if num != 0 and num & ((1 << (10 * factor)) - 1) == 0:
            return num >> (10 * factor), factor, tlong if long_prefix else tshort
    return num, 0, ""


def binary_prefix(num, unit):
    """
    Render ``num`` of ``unit`` with the largest exact binary prefix, e.g. ``4MiB (4194304B)``.

    The exact count is kept in parentheses; counts without an exact prefix are rendered as is.
    """
    value, factor, prefix = binary_prefix_split(num)
    if factor == 0:
        return "{}{}".format(num, unit)
    return "{}{}{} ({}{})".format(value, prefix, unit, num, unit)
