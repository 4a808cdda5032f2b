"""Custom exceptions for fitdiag."""


class FitDiagError(Exception):
    """Base exception for all fitdiag errors."""

    pass


class MissingReferenceError(FitDiagError):
    """No reference baseline exists for the requested grade and gender."""

    def __init__(self, message: str = "Reference baseline not found") -> None:
        self.message = message
        super().__init__(self.message)


class InvalidMeasurementError(FitDiagError):
    """A raw measurement is missing required values or uses unsupported equipment."""

    def __init__(self, message: str = "Invalid measurement") -> None:
        self.message = message
        super().__init__(self.message)


class InvalidQueryError(FitDiagError):
    """An analytics request has an unknown type or parameter."""

    def __init__(self, message: str = "Invalid type parameter") -> None:
        self.message = message
        super().__init__(self.message)


class AnalyticsProcessingError(FitDiagError):
    """Fetching records for an analytics request failed."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: str | None = None,
    ) -> None:
        self.message = message
        self.details = details
        super().__init__(f"{message}: {details}" if details else message)
