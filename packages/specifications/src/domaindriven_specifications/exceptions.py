"""
Specification exception hierarchy.

All exceptions inherit from ``SpecificationError`` and provide
``to_dict()`` for API-friendly error responses.

Evaluation never raises: only construction-time misuse is an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError


class SpecificationError(Exception):
    """Base exception for all specification errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ConfigurationError(SpecificationError):
    """
    A specification (or a specification family) was built with invalid options.

    Carries structured errors: ``{field: [messages]}``.  Raised synchronously
    to the constructing caller and never defaulted away.
    """

    def __init__(
        self,
        message: str,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        self.message = message
        self.errors: dict[str, list[str]] = errors if errors is not None else {}
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if not self.errors:
            return self.message
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in self.errors.items()
        )
        return f"{self.message} ({details})"

    @classmethod
    def from_pydantic(
        cls, message: str, exc: PydanticValidationError
    ) -> ConfigurationError:
        """Flatten a pydantic ``ValidationError`` into ``{field: [messages]}``."""
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
            msg = error.get("msg", "validation error")
            errors.setdefault(loc, []).append(msg)
        return cls(message, errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "CONFIGURATION_ERROR",
            "message": self.message,
            "errors": self.errors,
        }
