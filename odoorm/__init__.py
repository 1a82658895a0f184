"""odoorm: active-record access to Odoo over the JSON-2 API.

Usage:
    import odoorm
    from odoorm.models import Contact, CustomerInvoice

    odoorm.configure(url="https://erp.example.com", api_key="...")

    # Query records
    contacts = Contact.where("credit_limit > 1000", limit=10)
    acme = Contact.find_by(name="Acme Corp")

    # Create a record
    invoice = CustomerInvoice.create(partner_id=acme.id)

    # Update a record
    acme.update(phone="+1 555 0100")

    # Delete a record
    acme.destroy()
"""

import logging

from .client import OdooClient
from .connection import configure, get_client, reset
from .domain import build_domain, parse_condition
from .exceptions import (
    AccessDeniedError,
    APIError,
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    InvalidArgumentError,
    InvalidConditionError,
    NotFoundError,
    NotPersistedError,
    OdoormError,
    RecordDestroyedError,
    TimeoutError,
    ValidationError,
)
from .model import DiscriminatedModel, Model, lookup_model
from .types import Condition, Reference

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "OdooClient",
    "configure",
    "get_client",
    "reset",
    "build_domain",
    "parse_condition",
    "Model",
    "DiscriminatedModel",
    "lookup_model",
    "Condition",
    "Reference",
    "OdoormError",
    "ConfigurationError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "AuthenticationError",
    "AccessDeniedError",
    "NotFoundError",
    "ValidationError",
    "InvalidArgumentError",
    "InvalidConditionError",
    "NotPersistedError",
    "RecordDestroyedError",
]
