class WeatherProviderError(Exception):
    def __init__(self, message: str = "Weather provider error", status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WeatherRateLimitError(WeatherProviderError):
    def __init__(
        self, message: str = "Rate limit exceeded", retry_after: float | None = None
    ) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class WeatherAuthenticationError(WeatherProviderError):
    pass


class WeatherUnavailableError(WeatherProviderError):
    pass


class MalformedWeatherResponseError(ValueError):
    pass
