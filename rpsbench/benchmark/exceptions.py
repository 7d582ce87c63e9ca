"""Custom exceptions for the benchmarking system."""
from typing import List, Optional


class BenchmarkError(Exception):
    """Base class for errors that abort a benchmark run."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.suggestions = suggestions or []
        self.cause = cause


class BenchmarkExecutionError(BenchmarkError):
    """Custom exception for benchmark execution failures."""
    pass


class DependencyMissingError(BenchmarkError):
    """Exception raised when a required runtime capability is absent."""
    pass


class TargetNotFoundError(BenchmarkError):
    """Exception raised when no candidate port serves the expected target."""

    def __init__(self, message: str, ports: Optional[List[int]] = None, suggestions: Optional[List[str]] = None):
        super().__init__(message, suggestions=suggestions)
        self.ports = ports or []


class ConfigurationError(BenchmarkError):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 suggestions: Optional[List[str]] = None, cause: Optional[Exception] = None):
        super().__init__(message, suggestions=suggestions, cause=cause)
        self.config_key = config_key


class RequestError(Exception):
    """Exception raised when a request fails."""
    pass
