"""Client input errors raised by the property query layer."""


class PropertyQueryError(ValueError):
    """Base class for rejected search or lookup input."""

    kind = "invalid_request"


class InvalidRangeError(PropertyQueryError):
    kind = "invalid_range"

    def __init__(self, min_price: object, max_price: object) -> None:
        super().__init__(
            f"min_price ({min_price}) cannot be greater than max_price ({max_price})"
        )
        self.min_price = min_price
        self.max_price = max_price


class InvalidPageSizeError(PropertyQueryError):
    kind = "invalid_page_size"

    def __init__(self, page_size: int, max_page_size: int) -> None:
        super().__init__(f"page_size must be between 1 and {max_page_size}, got {page_size}")
        self.page_size = page_size


class FragmentTooLongError(PropertyQueryError):
    kind = "fragment_too_long"

    def __init__(self, field: str, max_length: int) -> None:
        super().__init__(f"{field} is too long (max {max_length})")
        self.field = field


class MalformedIdentifierError(PropertyQueryError):
    kind = "malformed_identifier"

    def __init__(self, value: str | None) -> None:
        if value is None or not value.strip():
            message = "property id is required"
        else:
            message = "invalid property id format, expected a 24-hex string"
        super().__init__(message)
        self.value = value
