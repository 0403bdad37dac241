from __future__ import annotations


class RestaurantNotFoundError(Exception):
    public_message = "Restaurant not found"


class RequestValidationFailedError(Exception):
    public_message = "Validation failed"

    def __init__(self, messages: dict[str, list[str]]) -> None:
        super().__init__(self.public_message)
        self.messages = messages
