"""Pydantic option models validated when specifications are constructed."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError

SpecName = Annotated[str, StringConstraints(strict=True, min_length=1)]

M = TypeVar("M", bound=BaseModel)


class SpecificationOptions(BaseModel):
    """
    Options accepted by :func:`~domaindriven_specifications.specification`.

    Attributes:
        name: Human-readable, non-empty name.
        is_satisfied_by: Pure predicate ``candidate -> bool``.
        to_query: Optional zero-argument callable returning a structured filter.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: SpecName
    is_satisfied_by: Callable[[Any], Any]
    to_query: Callable[[], dict[str, Any]] | None = None


class ParameterizedOptions(BaseModel):
    """
    Options accepted by :func:`~domaindriven_specifications.parameterized`.

    ``name`` is either a fixed string or a callable rendering the name from
    the family parameters.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: SpecName | Callable[[Any], str]
    create_predicate: Callable[[Any], Callable[[Any], Any]]
    create_query: Callable[[Any], Callable[[], dict[str, Any]]] | None = None


def parse_options(
    model: type[M],
    options: M | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
    *,
    context: str,
) -> M:
    """
    Validate *options* (merged with keyword *overrides*) into *model*.

    Raises:
        ConfigurationError: If nothing was supplied, the options are not a
            mapping, or pydantic validation fails.
    """
    if options is None and not overrides:
        raise ConfigurationError(f"{context} options are required")
    if isinstance(options, model) and not overrides:
        return options

    if options is None:
        data: dict[str, Any] = {}
    elif isinstance(options, BaseModel):
        data = {name: getattr(options, name) for name in type(options).model_fields}
    elif isinstance(options, Mapping):
        data = dict(options)
    else:
        raise ConfigurationError(
            f"{context} options must be a mapping, got {type(options).__name__}"
        )
    data.update(overrides)

    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigurationError.from_pydantic(
            f"Invalid {context.lower()} options", exc
        ) from exc
