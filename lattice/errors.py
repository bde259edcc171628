# ========================= lattice/errors.py =========================

class InvalidCoordinate(ValueError):
    """Raised when a value cannot be turned into a Location."""


class InvalidNote(ValueError):
    """Raised for a zero/negative ratio part, a non-positive fundamental or a bad offset."""
