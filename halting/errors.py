"""
Exceptions raised by the halting analysis.

Both error kinds are permanent for a given input: the analysis is aborted
without a partial result and nothing is retried.
"""


class HaltingAnalysisError(Exception):
    """Base class for halting analysis failures."""

    pass


class ConfigurationError(HaltingAnalysisError):
    """Raised when the supplied network graph cannot be analyzed."""

    pass


class TopologyFormatError(ConfigurationError):
    """Raised when a topology document cannot be read or validated."""

    pass


class UnsupportedConfigurationError(HaltingAnalysisError):
    """Raised when an analysis option is accepted but not implemented."""

    pass
