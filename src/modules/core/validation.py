"""Helpers shared by every module that validates input with Pydantic."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError


def validation_messages(exc: PydanticValidationError) -> list[str]:
    """Flatten a Pydantic ``ValidationError`` into ``"field: message"`` strings.

    Every violation is kept, in the order Pydantic reports them.
    """
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid value.")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.append(f"{field}: {message}" if field else message)
    return messages
