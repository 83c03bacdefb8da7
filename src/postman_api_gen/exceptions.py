"""Exception hierarchy for postman-api-gen.

Every exception carries an ``exit_code``. The CLI catches
:class:`PostmanApiGenError` once at the top, logs it and exits with that code.

    PostmanApiGenError      (exit 1)
    +-- TemplateSlotError     (exit 1)
    +-- ConfigurationError    (exit 2)
    +-- GenerationCancelled   (exit 3)
    +-- CollectionFetchError  (exit 4)
    +-- CollectionParseError  (exit 5)
"""


class PostmanApiGenError(Exception):
    """Base exception for all generator errors."""

    exit_code: int = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigurationError(PostmanApiGenError):
    """The destination or the collection source cannot be resolved."""

    exit_code = 2


class GenerationCancelled(PostmanApiGenError):
    """The user refused to overwrite an existing destination."""

    exit_code = 3


class CollectionFetchError(PostmanApiGenError):
    """The collection could not be downloaded."""

    exit_code = 4


class CollectionParseError(PostmanApiGenError):
    """The downloaded or loaded document is not a collection."""

    exit_code = 5


class TemplateSlotError(PostmanApiGenError):
    """A module slot was resolved twice or rendered while still open."""
