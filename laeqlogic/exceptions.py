class LAeqError(Exception): ...


class CanonError(LAeqError): ...


class IngestError(LAeqError): ...


class NoDataError(LAeqError): ...


class InvalidWindowError(LAeqError): ...


class ConfigError(LAeqError): ...


def require(condition: bool, message: str, exc: type[LAeqError] = LAeqError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
