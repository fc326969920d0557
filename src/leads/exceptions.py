"""Exceptions raised by the lead lookup and tracking service."""


class LeadError(Exception):
    """Base class for lead service errors."""

    pass


class LeadValidationError(LeadError, ValueError):
    """Raised when required lead parameters are missing or invalid.

    Raised before any request is sent to Notion.
    """

    pass


class LeadLookupError(LeadError):
    """Raised when the lead database could not be queried."""

    pass


class UnknownTrackingColumnError(LeadError):
    """Raised when a tracking event names a column that is not tracked."""

    def __init__(self, column: str) -> None:
        """Initialise the error.

        :param column: The rejected column name.
        """
        super().__init__(f"Unknown tracking column: {column}")
        self.column = column


class TrackingError(LeadError):
    """Raised when a counter could not be read or written in Notion."""

    pass
