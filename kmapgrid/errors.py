"""Exception types raised by the K-map grid model and its solver."""


class KMapError(ValueError):
    """Base class for every error reported to the K-map caller."""


class RangeError(KMapError):
    """Variable count or minterm index outside the supported domain."""


class StructuralError(KMapError):
    """Implicant or index set that does not fit the declared variable count."""


class InputError(KMapError):
    """User-entered text that cannot be turned into index lists."""


__all__ = ["KMapError", "RangeError", "StructuralError", "InputError"]
