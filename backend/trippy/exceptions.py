"""Error taxonomy shared by the engine and the HTTP layer."""


class TrippyError(Exception):
    """Base class for every failure the engine reports to callers."""

    status_code = 500

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        payload = {"error": self.message, "category": self.category}
        if self.details:
            payload["details"] = self.details
        return payload

    @property
    def category(self) -> str:
        return "internal"


class ValidationFailure(TrippyError):
    """Input-shape error: missing identifiers, malformed date ranges, unknown ids."""

    status_code = 422

    @property
    def category(self) -> str:
        return "validation"


class UpstreamMalformedError(TrippyError):
    """Generative-text output that is not valid JSON or breaks its contract."""

    status_code = 502

    @property
    def category(self) -> str:
        return "upstream_malformed"


class UpstreamUnavailableError(TrippyError):
    """No generative-text provider is configured, or every provider failed."""

    status_code = 503

    @property
    def category(self) -> str:
        return "upstream_unavailable"
