"""Active-record base classes for Odoo models.

A model class is bound to one remote model name; its class methods query
and create remote records, its instances hold one record's field values.

Usage:
    from odoorm import Model

    class Contact(Model, model_name="res.partner"):
        pass

    contact = Contact.find(42)
    companies = Contact.where(is_company=True, limit=10)
    big = Contact.where("credit_limit > 1000")

    draft = Contact(name="Draft")
    draft.email = "draft@example.com"
    draft.save()
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from . import connection
from .domain import build_domain
from .exceptions import (
    ConfigurationError,
    NotFoundError,
    NotPersistedError,
    RecordDestroyedError,
)
from .types import Condition, Domain

logger = logging.getLogger(__name__)

_registry: dict[str, type["Model"]] = {}


def lookup_model(name: str) -> type["Model"]:
    """Return the model class declared for a remote model name.

    Raises:
        ConfigurationError: No class declares ``name``.
    """
    try:
        return _registry[name]
    except KeyError:
        raise ConfigurationError(f"No model declared for {name!r}") from None


def _normalize(*mappings: Mapping[Any, Any] | None) -> dict[str, Any]:
    """Merge mappings into one dict with string keys."""
    result: dict[str, Any] = {}
    for mapping in mappings:
        for key, value in (mapping or {}).items():
            result[key if isinstance(key, str) else str(key)] = value
    return result


class Model:
    """Base class for Odoo models.

    Subclasses bind a remote model name at definition time; the name is
    inherited by further subclasses unless they declare their own.

    Field values live in a plain dict and are reachable by item access
    (``record["name"]``), by :meth:`get` / :meth:`set`, or as attributes
    (``record.name``). Unknown fields read as None.
    """

    _model_name: ClassVar[str | None] = None

    def __init_subclass__(cls, model_name: str | None = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if model_name is not None:
            cls._model_name = model_name
            _registry[model_name] = cls

    # Class-level queries

    @classmethod
    def model_name(cls) -> str:
        """Return the remote model name (e.g., "res.partner")."""
        if cls._model_name is None:
            raise ConfigurationError(f"{cls.__name__} does not declare a model name")
        return cls._model_name

    @classmethod
    def find(cls, id: int) -> "Model":  # noqa: A002
        """Fetch one record by id.

        Raises:
            NotFoundError: No record has this id.
        """
        result = cls.execute("read", {"ids": [id]})
        if not result:
            raise NotFoundError(f"{cls.model_name()} with id={id} not found")
        return cls(result[0])

    @classmethod
    def where(
        cls,
        conditions: Any = None,
        *,
        fields: list[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
        lang: str | None = None,
        **attrs: Any,
    ) -> list["Model"]:
        """Search for records.

        Args:
            conditions: A condition string, a list of condition strings, a
                mapping of equality conditions or a raw domain.
            fields: Fields to read (all if not specified). A single field
                name may be given as a plain string.
            limit: Maximum number of records.
            offset: Number of records to skip.
            lang: Language used for translatable fields.
            **attrs: Equality conditions. These replace ``conditions``.

        Returns:
            Matching records in server order.

        Example:
            >>> Contact.where("credit_limit > 1000")
            >>> Contact.where(["credit_limit > 1000", "active = true"])
            >>> Contact.where([("is_company", "=", True)], limit=10)
            >>> Contact.where(name="Acme", is_company=True)
        """
        domain = cls._scope_domain(build_domain(conditions, attrs))

        params: dict[str, Any] = {"domain": domain}
        if fields is not None:
            params["fields"] = [fields] if isinstance(fields, str) else list(fields)
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset
        if lang is not None:
            params["context"] = {"lang": lang}

        records = cls.execute("search_read", params) or []
        return [cls(record) for record in records]

    @classmethod
    def all(
        cls,
        *,
        fields: list[str] | None = None,
        limit: int | None = None,
        lang: str | None = None,
    ) -> list["Model"]:
        """Fetch every record, optionally limited."""
        return cls.where([], fields=fields, limit=limit, lang=lang)

    @classmethod
    def find_by(
        cls, conditions: Any = None, *, lang: str | None = None, **attrs: Any
    ) -> "Model | None":
        """Return the first record matching the conditions, or None."""
        records = cls.where(conditions, limit=1, lang=lang, **attrs)
        return records[0] if records else None

    @classmethod
    def find_by_or_raise(
        cls, conditions: Any = None, *, lang: str | None = None, **attrs: Any
    ) -> "Model":
        """Return the first record matching the conditions.

        Raises:
            NotFoundError: Nothing matches.
        """
        record = cls.find_by(conditions, lang=lang, **attrs)
        if record is None:
            raise NotFoundError(
                f"{cls.model_name()} matching {conditions!r} {attrs!r} not found"
            )
        return record

    @classmethod
    def create(
        cls,
        attrs: Mapping[str, Any] | None = None,
        *,
        lang: str | None = None,
        **kwargs: Any,
    ) -> "Model":
        """Create a record and return it as read back from the server.

        Example:
            >>> contact = Contact.create(name="New Contact", email="new@example.com")
            >>> contact.id
            123
        """
        values = cls._scope_values(_normalize(attrs, kwargs))

        params: dict[str, Any] = {"vals_list": [values]}
        if lang is not None:
            params["context"] = {"lang": lang}

        ids = cls.execute("create", params)
        if not ids:
            raise NotFoundError(f"{cls.model_name()} create returned no id")
        return cls.find(ids[0])

    @classmethod
    def execute(cls, method: str, params: dict[str, Any] | None = None) -> Any:
        """Call a method of this model on the server."""
        model = cls.model_name()
        return connection.get_client().execute(model, method, params or {})

    @classmethod
    def _scope_domain(cls, domain: Domain) -> Domain:
        return domain

    @classmethod
    def _scope_values(cls, values: dict[str, Any]) -> dict[str, Any]:
        return values

    # Instance attributes and lifecycle

    def __init__(self, attributes: Mapping[str, Any] | None = None, /, **kwargs: Any):
        object.__setattr__(self, "_attributes", _normalize(attributes, kwargs))
        object.__setattr__(self, "_destroyed", False)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._attributes.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __getitem__(self, key: str) -> Any:
        return self._attributes.get(str(key))

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._attributes

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._attributes))

    def __repr__(self) -> str:
        parts = [f"id={self.id!r}"]
        parts.extend(f"{k}={v!r}" for k, v in self._attributes.items() if k != "id")
        return f"<{type(self).__name__} {' '.join(parts)}>"

    def get(self, key: str, default: Any = None) -> Any:
        """Return a field value, or ``default`` if the field is absent."""
        return self._attributes.get(str(key), default)

    def set(self, key: str, value: Any) -> None:
        """Set a field value locally."""
        self._check_not_destroyed()
        self._attributes[str(key)] = value

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the field values."""
        return copy.deepcopy(self._attributes)

    @property
    def persisted(self) -> bool:
        """Whether the record exists on the server (has an id)."""
        return self._attributes.get("id") is not None

    @property
    def destroyed(self) -> bool:
        """Whether the record has been deleted on the server."""
        return self._destroyed

    def save(self) -> "Model":
        """Create the record if it has no id yet, otherwise write every field."""
        if self.persisted:
            values = self.to_dict()
            values.pop("id", None)
            self.update(values)
        else:
            created = type(self).create(self.to_dict())
            self.id = created.id
        return self

    def update(self, attrs: Mapping[str, Any] | None = None, **kwargs: Any) -> "Model":
        """Write fields on the server, then apply them locally.

        Raises:
            NotPersistedError: The record has no id.
        """
        self._check_persisted("update")
        self._check_not_destroyed()

        values = _normalize(attrs, kwargs)
        self.execute("write", {"ids": [self.id], "vals": values})
        self._attributes.update(values)
        return self

    def reload(self) -> "Model":
        """Refresh fields from the server.

        Fields the server does not return keep their local value.
        """
        self._check_persisted("reload")
        self._check_not_destroyed()

        fresh = type(self).find(self.id)
        self._attributes.update(fresh._attributes)
        return self

    def destroy(self) -> "Model":
        """Delete the record on the server.

        The record is read-only afterwards: any further change raises
        RecordDestroyedError.
        """
        self._check_persisted("destroy")
        self._check_not_destroyed()

        self.execute("unlink", {"ids": [self.id]})
        object.__setattr__(self, "_destroyed", True)
        return self

    def _check_persisted(self, action: str) -> None:
        if not self.persisted:
            raise NotPersistedError(
                f"Cannot {action} a record that hasn't been persisted"
            )

    def _check_not_destroyed(self) -> None:
        if self._destroyed:
            raise RecordDestroyedError(
                f"{type(self).__name__} id={self.id!r} has been destroyed"
            )


class DiscriminatedModel(Model):
    """A model sharing its remote table with sibling types.

    The base class names the discriminating field; each concrete type
    declares the fixed value it stands for. Searches on a concrete type are
    restricted to that value and records it creates carry it.

    Example:
        class Move(DiscriminatedModel, model_name="account.move"):
            discriminator_field = "move_type"

        class Invoice(Move, discriminator="out_invoice"):
            pass

        Invoice.where(state="posted")
        # domain: [("move_type", "=", "out_invoice"), ("state", "=", "posted")]
    """

    discriminator_field: ClassVar[str | None] = None
    _discriminator: ClassVar[str | None] = None

    def __init_subclass__(cls, discriminator: Any = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if discriminator is not None:
            if cls.discriminator_field is None:
                raise TypeError(f"{cls.__name__} has no discriminator_field")
            cls._discriminator = getattr(discriminator, "value", discriminator)

    @classmethod
    def default_discriminator(cls) -> str | None:
        """Return the discriminator value of this type, None for the base type."""
        return cls._discriminator

    @classmethod
    def _scope_domain(cls, domain: Domain) -> Domain:
        value = cls.default_discriminator()
        if value is None:
            return domain
        return [Condition(cls.discriminator_field, "=", value), *domain]

    @classmethod
    def _scope_values(cls, values: dict[str, Any]) -> dict[str, Any]:
        value = cls.default_discriminator()
        if value is None:
            return values
        # Explicit values from the caller win.
        return {cls.discriminator_field: value, **values}
