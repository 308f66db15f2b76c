from errors import InvalidArgumentError


def validate_page_request(page: int, size: int) -> None:
    if page < 0:
        raise InvalidArgumentError("page must be >= 0")
    if size < 1:
        raise InvalidArgumentError("size must be >= 1")
