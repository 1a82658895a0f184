"""Search domain construction.

Turns the condition shapes accepted by ``Model.where`` into the list of
``(field, operator, value)`` triples the server understands:

- None: empty domain (matches every record)
- str: ``"credit_limit > 1000"`` -> ``[("credit_limit", ">", 1000)]``
- mapping: ``{"name": "Acme"}`` -> ``[("name", "=", "Acme")]``
- sequence of str: each item parsed as above
- sequence of triples: a raw domain, passed through as is

Keyword equality attributes, when given, replace the positional conditions.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from .exceptions import InvalidArgumentError, InvalidConditionError
from .types import OPERATORS, Condition, Domain, Scalar

logger = logging.getLogger(__name__)

# Longer operators first so "=like" is not read as "=" followed by "like ...".
_OPERATOR_ALTERNATION = "|".join(
    re.escape(op) for op in sorted((*OPERATORS, "<>"), key=len, reverse=True)
)
CONDITION_PATTERN = re.compile(
    rf"(\w+)\s*({_OPERATOR_ALTERNATION})\s*(.+)",
    re.IGNORECASE,
)
INTEGER_PATTERN = re.compile(r"-?[0-9]+")
FLOAT_PATTERN = re.compile(r"-?[0-9]+\.[0-9]+")


def build_domain(conditions: Any = None, attrs: Mapping[str, Any] | None = None) -> Domain:
    """Build a search domain from any supported condition shape.

    Args:
        conditions: None, a condition string, a mapping of equality
            conditions, a list of condition strings or a raw domain.
        attrs: Keyword equality conditions. When non-empty they take
            precedence and ``conditions`` is ignored.

    Returns:
        A list of condition triples.

    Raises:
        InvalidArgumentError: ``conditions`` has an unsupported type.
        InvalidConditionError: A condition string cannot be parsed.
    """
    if attrs:
        if conditions:
            logger.warning(
                "Ignoring positional conditions %r in favour of keyword conditions %r",
                conditions,
                dict(attrs),
            )
        return mapping_to_domain(attrs)
    if conditions is None:
        return []

    if isinstance(conditions, str):
        return [parse_condition(conditions)]
    if isinstance(conditions, Mapping):
        return mapping_to_domain(conditions)
    if isinstance(conditions, (list, tuple)):
        return sequence_to_domain(conditions)

    raise InvalidArgumentError(f"Invalid conditions: {type(conditions).__name__}")


def mapping_to_domain(mapping: Mapping[Any, Any]) -> Domain:
    """Convert ``{field: value}`` pairs into equality conditions."""
    return [Condition(str(key), "=", value) for key, value in mapping.items()]


def sequence_to_domain(items: list[Any] | tuple[Any, ...]) -> Domain:
    """Parse a list of condition strings, or pass a raw domain through."""
    if not items:
        return []
    if isinstance(items[0], str):
        return [parse_condition(item) for item in items]
    return list(items)


def parse_condition(text: str) -> Condition:
    """Parse a human-readable condition such as ``"age >= 18"``.

    The operator is matched case-insensitively and lower-cased; ``<>`` is
    rewritten to ``!=``. The value is typed by :func:`parse_value`.

    Raises:
        InvalidConditionError: ``text`` is not ``field operator value``.
    """
    if not isinstance(text, str):
        raise InvalidArgumentError(f"Invalid condition: {type(text).__name__}")

    match = CONDITION_PATTERN.fullmatch(text.strip())
    if not match:
        raise InvalidConditionError(f"Invalid condition: '{text}'")

    field, operator, raw_value = match.groups()
    operator = "!=" if operator == "<>" else operator.lower()
    return Condition(field, operator, parse_value(raw_value.strip()))


def parse_value(text: str) -> Scalar:
    """Infer the type of a condition value.

    Quoted text is a string (quotes removed, no escape processing),
    ``true``/``false`` are booleans, ``-?digits`` is an integer and
    ``-?digits.digits`` a float. Anything else is returned unchanged.
    """
    if len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
        return text[1:-1]
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if INTEGER_PATTERN.fullmatch(text):
        return int(text)
    if FLOAT_PATTERN.fullmatch(text):
        return float(text)
    return text
