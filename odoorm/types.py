"""Type definitions for odoorm."""

from dataclasses import dataclass
from typing import Any, NamedTuple, Union

Scalar = Union[str, int, float, bool]

OPERATORS = ("=", "!=", "<=", ">=", "<", ">", "like", "ilike", "=like", "=ilike")


class Condition(NamedTuple):
    """One ``(field, operator, value)`` term of a search domain.

    Serializes to a three element JSON array, which is the form the
    server expects inside ``domain``.
    """

    field: str
    operator: str
    value: Any


# Raw domains supplied by callers are passed through untouched, so a domain
# may hold plain lists or tuples as well as Condition instances.
Domain = list


@dataclass(frozen=True)
class Reference:
    """A many-to-one value as returned by ``read`` / ``search_read``."""

    id: int
    label: str | None = None

    @classmethod
    def from_value(cls, value: Any) -> "Reference | None":
        """Create a Reference from an ``[id, label]`` pair or a bare id.

        Unset many-to-one fields come back as ``False``; those map to None.
        """
        if isinstance(value, (list, tuple)):
            if not value or not value[0]:
                return None
            label = value[1] if len(value) > 1 else None
            return cls(id=value[0], label=label)
        if value is None or value is False:
            return None
        return cls(id=value)


def many2one_id(value: Any) -> int | None:
    """Return the record id held by a many-to-one value, or None."""
    ref = Reference.from_value(value)
    return ref.id if ref else None
