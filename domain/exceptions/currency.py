class RateServiceError(Exception):
    pass


class ProviderError(RateServiceError):
    """An adapter could not produce a snapshot."""

    def __init__(self, provider_name: str, message: str):
        self.provider_name = provider_name
        super().__init__(message)


class MissingCredentialError(ProviderError):
    pass


class ProviderTimeoutError(ProviderError):
    pass


class ProviderRejectedError(ProviderError):
    pass


class ProviderUnavailableError(ProviderError):
    pass


class ProviderNoDataError(RateServiceError):
    pass


class UnknownProviderError(RateServiceError):
    pass


class AllProvidersExhaustedError(RateServiceError):
    def __init__(self, base: str, messages: list[str]):
        self.base = base
        self.messages = list(messages)
        detail = '; '.join(self.messages) if self.messages else 'no provider serves this base'
        super().__init__(f'All providers failed for {base}. Errors: {detail}')


class InvalidCurrencyError(Exception):
    pass
