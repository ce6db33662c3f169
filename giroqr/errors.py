#
# Exceptions raised by the QR-code encoder.
#

class QRError(Exception):
    """Base class for all encoder errors."""


class DomainError(QRError, ValueError):
    """Galois field operation outside its domain, e.g. log(0)."""


class CapacityError(QRError, ValueError):
    """Encoded data does not fit into the symbol."""


class StateError(QRError, RuntimeError):
    """Operation not allowed in the current encoder state."""


class BoundsError(QRError, IndexError):
    """Module coordinate outside the symbol."""
