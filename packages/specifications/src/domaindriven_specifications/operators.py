from enum import Enum


class SpecificationOperator(str, Enum):
    """Operators carried by specifications for introspection and serialisation."""

    # Comparison
    EQ = "="
    GT = ">"
    LT = "<"
    IN = "in"
    BETWEEN = "between"

    # String / collection
    CONTAINS = "contains"
    REGEX = "regex"

    # Null checks
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    # Constants
    ALWAYS = "always"
    NEVER = "never"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"


LOGICAL_OPERATORS: frozenset[SpecificationOperator] = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT}
)
