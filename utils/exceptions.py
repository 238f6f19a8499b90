"""
Exception hierarchy for the scan pipeline.

Only InvalidScanInput and ScanAborted reach the caller; every other error is
caught where it happens and degrades the scan instead of failing it.
"""


class RadarScanError(Exception):
    """Base class for all scan pipeline errors."""


class InvalidScanInput(RadarScanError, ValueError):
    """Scan input cannot be scanned (empty brand name, out-of-range limits)."""


class ScanAborted(RadarScanError):
    """The caller cancelled an in-flight scan."""


class ParseFailure(RadarScanError):
    """A generative step returned output that could not be parsed."""


class ProviderError(RadarScanError):
    """An LLM provider call failed."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class ProviderUnconfigured(ProviderError):
    """No credential is configured for the provider."""

    def __init__(self, provider: str):
        super().__init__(provider, "API key not configured")


class ProviderTimeout(ProviderError):
    """The provider did not answer inside the per-call budget."""


class ProviderRateLimited(ProviderError):
    """The provider rejected the call with a rate limit. Never retried."""
