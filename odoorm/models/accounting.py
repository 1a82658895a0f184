"""Accounting models.

Customer invoices, provider invoices, credit notes and journal entries are
all stored in ``account.move`` and told apart by ``move_type``. Each has its
own class here; :class:`AccountingEntry` itself searches across all of them.

Usage:
    invoice = CustomerInvoice.create(partner_id=42)
    bills = ProviderInvoice.where(state="posted")
    entries = AccountingEntry.where("date > '2025-01-01'")
"""

from enum import Enum
from pathlib import Path
from typing import Union

from ..model import DiscriminatedModel, Model
from ..types import many2one_id
from .attachment import Attachment, FileSource

PDF_MIMETYPE = "application/pdf"


class MoveType(str, Enum):
    """Values of ``account.move.move_type``."""

    ENTRY = "entry"
    OUT_INVOICE = "out_invoice"
    IN_INVOICE = "in_invoice"
    OUT_REFUND = "out_refund"
    IN_REFUND = "in_refund"


class Account(Model, model_name="account.account"):
    pass


class AnalyticAccount(Model, model_name="account.analytic.account"):
    pass


class AnalyticPlan(Model, model_name="account.analytic.plan"):
    pass


class Journal(Model, model_name="account.journal"):
    pass


class Tax(Model, model_name="account.tax"):
    pass


class AccountingEntryLine(Model, model_name="account.move.line"):
    """A debit or credit line of an accounting entry.

    Example:
        >>> lines = AccountingEntryLine.where(move_id=42)
        >>> lines[0].debit, lines[0].credit
        (1000.0, 0.0)
    """


class AccountingEntry(DiscriminatedModel, model_name="account.move"):
    """Base class for every ``account.move`` type."""

    discriminator_field = "move_type"

    def attach_pdf(
        self,
        source: FileSource,
        *,
        filename: str | None = None,
        set_as_main: bool = True,
    ) -> Attachment:
        """Attach a PDF given as a path or a readable binary object.

        The filename defaults to the base name of the path.
        """
        attachment = Attachment.create_for(
            self,
            source,
            filename=filename or _derive_filename(source),
            mimetype=PDF_MIMETYPE,
        )
        if set_as_main:
            self.set_main_attachment(attachment)
        return attachment

    def attach_pdf_from_base64(
        self, data: str, *, filename: str, set_as_main: bool = True
    ) -> Attachment:
        """Attach a base64-encoded PDF."""
        attachment = Attachment.create_from_base64(
            self, data, filename=filename, mimetype=PDF_MIMETYPE
        )
        if set_as_main:
            self.set_main_attachment(attachment)
        return attachment

    def set_main_attachment(self, attachment: Union[Attachment, int]) -> "AccountingEntry":
        """Make an attachment the one shown in the document side panel."""
        attachment_id = attachment.id if isinstance(attachment, Attachment) else attachment
        return self.update(message_main_attachment_id=attachment_id)

    def attachments(self, mimetype: str | None = None) -> list[Attachment]:
        return Attachment.for_record(self, mimetype=mimetype)

    def main_attachment(self) -> Attachment | None:
        attachment_id = many2one_id(self["message_main_attachment_id"])
        if attachment_id is None:
            return None
        return Attachment.find(attachment_id)


class CustomerInvoice(AccountingEntry, discriminator=MoveType.OUT_INVOICE):
    pass


class ProviderInvoice(AccountingEntry, discriminator=MoveType.IN_INVOICE):
    pass


class CustomerCreditNote(AccountingEntry, discriminator=MoveType.OUT_REFUND):
    pass


class ProviderCreditNote(AccountingEntry, discriminator=MoveType.IN_REFUND):
    pass


class JournalEntry(AccountingEntry, discriminator=MoveType.ENTRY):
    pass


def _derive_filename(source: FileSource) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return Path(name).name
    return "attachment.pdf"
