"""Error types raised inside the search state engine."""


class SearchStateError(Exception):
    """Base class for search state engine errors."""

    pass


class ValidationError(SearchStateError):
    """A preset draft was rejected before reaching the store."""

    pass


class FetchError(SearchStateError):
    """Presets or default selections could not be read from the store."""

    pass


class SaveError(SearchStateError):
    """A preset or default selection could not be written to the store."""

    pass


class DeleteError(SearchStateError):
    """A preset could not be deleted from the store."""

    pass


class DecodeError(SearchStateError):
    """A single URL parameter was malformed."""

    def __init__(self, key: str, value: str, reason: str = "invalid value"):
        self.key = key
        self.value = value
        super().__init__(f"{key}={value!r}: {reason}")


class DefaultUpdateError(SaveError):
    """A preset was saved but could not be made its context's default."""

    def __init__(self, message: str, preset):
        self.preset = preset
        super().__init__(message)
