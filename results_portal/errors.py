class ResultsError(Exception):
    """Base class for every error raised by the results portal."""


class ValidationError(ResultsError):
    """A required input field is missing. Raised before any request is made."""


class LookupFailed(ResultsError):
    """The results API could not be reached or answered with an error."""


class ScanInProgressError(ResultsError):
    """A class scan is already running on this scanner."""
