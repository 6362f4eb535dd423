"""Domain errors surfaced to callers.

Messages are shown to users as-is, so they are full sentences rather than codes.
"""


class TransportApiError(Exception):
    """Base class for errors raised while fetching departures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidUrlError(TransportApiError):
    """The request URL could not be built or was rejected by the client."""

    def __init__(self) -> None:
        super().__init__("Invalid URL - Please contact support")


class InvalidResponseError(TransportApiError):
    """The backend answered, but with an unexpected or malformed response."""

    def __init__(self) -> None:
        super().__init__(
            "The OpenTransport API is currently unavailable. Please try again later."
        )


class NoJourneyFoundError(TransportApiError):
    """The backend reported that no connections exist (HTTP 404)."""

    def __init__(self) -> None:
        super().__init__("No connections found")


class TransportTimeoutError(TransportApiError):
    """The backend did not answer in time."""

    def __init__(self) -> None:
        super().__init__(
            "The OpenTransport API (transport.opendata.ch) is not responding (Timeout).\n\n"
            "Possible reasons:\n"
            "• Server overloaded\n"
            "• Server maintenance\n"
            "• Temporary API disruption\n\n"
            "Please try again in a few minutes."
        )


class TransportNetworkError(TransportApiError):
    """Connectivity problems and any other unexpected failure."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Connection problem: {detail}")
        self.detail = detail


class WeatherApiError(Exception):
    """Weather data could not be fetched or parsed."""
