class BookingSessionNotFound(LookupError):
    """Raised when a booking session id is unknown and no snapshot exists for it."""
    pass


class SelectionNotFound(LookupError):
    """Raised when a selected location, slot or coach id is not on offer."""
    pass


class SelectionRejected(ValueError):
    """Raised when a selection exists but cannot be taken (e.g. coach unavailable)."""
    pass
