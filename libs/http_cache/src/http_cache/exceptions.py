"""Errors raised while configuring the response cache backend."""


class CacheError(Exception):
    """Root of the http_cache error hierarchy."""


class StorageConfigurationError(CacheError):
    """The configured storage backend is not one the manager knows."""

    def __init__(self, storage_type: str) -> None:
        super().__init__(f"Unsupported cache storage backend: {storage_type!r}")
        self.storage_type = storage_type


class InvalidTTLError(CacheError, ValueError):
    """A cache TTL is negative.

    Subclasses ValueError so pydantic validators report it as a field error.
    """

    def __init__(self, field_name: str, value: int) -> None:
        super().__init__(f"{field_name} cannot be negative (got {value})")
        self.field_name = field_name
        self.value = value
