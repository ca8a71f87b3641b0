from .base import Specification, specification
from .common import (
    ParameterizedSpecification,
    always,
    between,
    contains,
    equals,
    greater_than,
    is_not_null,
    is_null,
    less_than,
    matches,
    never,
    parameterized,
    within,
)
from .composite import and_specification, not_specification, or_specification
from .exceptions import ConfigurationError, SpecificationError
from .operators import SpecificationOperator
from .options import ParameterizedOptions, SpecificationOptions
from .query import (
    AND_KEY,
    EMPTY_FILTER,
    NOT_KEY,
    OR_KEY,
    UNSATISFIABLE_FILTER,
    Filter,
    QueryFn,
    combine_and,
    combine_or,
    negate,
)
from .utils import MISSING, resolve_property, select, strict_equals

__all__ = [
    # Core types
    "Specification",
    "SpecificationOperator",
    "SpecificationOptions",
    "ParameterizedOptions",
    # Factory
    "specification",
    # Composites
    "and_specification",
    "or_specification",
    "not_specification",
    # Query conventions
    "Filter",
    "QueryFn",
    "AND_KEY",
    "OR_KEY",
    "NOT_KEY",
    "EMPTY_FILTER",
    "UNSATISFIABLE_FILTER",
    "combine_and",
    "combine_or",
    "negate",
    # Common predicates
    "equals",
    "contains",
    "matches",
    "greater_than",
    "less_than",
    "between",
    "within",
    "is_null",
    "is_not_null",
    "always",
    "never",
    "parameterized",
    "ParameterizedSpecification",
    # Exceptions
    "SpecificationError",
    "ConfigurationError",
    # Utilities
    "MISSING",
    "resolve_property",
    "strict_equals",
    "select",
]
