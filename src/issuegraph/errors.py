"""Error taxonomy for graph exports.

All errors are raised before any output is written. Conditions that only
degrade the result (dangling edges, missing metric values) never raise.
"""


class IssueGraphError(ValueError):
    """Base class for all export errors."""


class ConfigurationError(IssueGraphError):
    """Unrecognized format, missing output path or other unusable settings."""


class MissingMetricsError(ConfigurationError):
    """A metrics provider is required but none was supplied."""

    def __init__(self, message: str = "graph metrics are required for snapshot export"):
        super().__init__(message)


class EmptyGraphError(IssueGraphError):
    """Nothing is left to draw after filtering."""

    def __init__(self, message: str = "no issues to export"):
        super().__init__(message)
