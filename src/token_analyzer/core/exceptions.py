"""Custom exceptions for the token analyzer service."""


class TokenAnalyzerError(Exception):
    """Base exception for all token analyzer errors."""

    def __init__(self, message: str, error_code: str = None) -> None:
        """Initialize the exception with message and optional error code."""
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class DataError(TokenAnalyzerError):
    """Exception raised for data-related errors."""
    pass


class EmptyDataError(DataError):
    """Exception raised when a price/volume series holds no points."""

    def __init__(self, message: str = "Historical data series is empty") -> None:
        super().__init__(message)


class NoHistoricalDataError(DataError):
    """Exception raised when the data provider returns no usable series."""

    def __init__(self, identifier: str, reason: str = None) -> None:
        message = f"No historical data available for {identifier}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.identifier = identifier


class AnalysisError(TokenAnalyzerError):
    """Exception raised for analysis-related errors."""
    pass


class TechnicalAnalysisFailedError(AnalysisError):
    """Exception raised when a calculator fails unexpectedly during analysis."""

    def __init__(self, identifier: str, cause: BaseException) -> None:
        super().__init__(
            f"Failed to perform technical analysis for {identifier}: {cause}"
        )
        self.identifier = identifier
        self.cause = cause


class ConfigurationError(TokenAnalyzerError):
    """Exception raised for configuration errors."""
    pass


class ExternalServiceError(TokenAnalyzerError):
    """Exception raised for external service errors."""
    pass
