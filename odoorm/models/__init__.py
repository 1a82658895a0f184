"""Bindings for commonly used Odoo models."""

from .accounting import (
    Account,
    AccountingEntry,
    AccountingEntryLine,
    AnalyticAccount,
    AnalyticPlan,
    CustomerCreditNote,
    CustomerInvoice,
    Journal,
    JournalEntry,
    MoveType,
    ProviderCreditNote,
    ProviderInvoice,
    Tax,
)
from .attachment import Attachment
from .partners import Contact, Product, Project

__all__ = [
    "Account",
    "AccountingEntry",
    "AccountingEntryLine",
    "AnalyticAccount",
    "AnalyticPlan",
    "Attachment",
    "Contact",
    "CustomerCreditNote",
    "CustomerInvoice",
    "Journal",
    "JournalEntry",
    "MoveType",
    "Product",
    "Project",
    "ProviderCreditNote",
    "ProviderInvoice",
    "Tax",
]
