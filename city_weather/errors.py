# ABOUTME: Exception types surfaced by the weather screen.
# ABOUTME: Distinguishes bad user input from failed weather queries.

VALIDATION_MESSAGE = "Please enter the city name."
QUERY_FAILED_MESSAGE = "City not found"


class CityWeatherError(Exception):
    """Base class for errors shown to the user as a single banner line."""

    message: str = ""

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail


class ValidationError(CityWeatherError):
    """The place name was empty after trimming."""

    message = VALIDATION_MESSAGE


class QueryError(CityWeatherError):
    """The weather query failed: transport error, non-2xx status, or malformed body.

    All causes collapse into the same user-visible message; ``detail`` keeps the
    underlying reason for logging.
    """

    message = QUERY_FAILED_MESSAGE
