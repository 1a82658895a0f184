from __future__ import annotations

import base64
import io

import pytest

from odoorm import DiscriminatedModel
from odoorm.models import (
    AccountingEntry,
    Attachment,
    CustomerCreditNote,
    CustomerInvoice,
    JournalEntry,
    MoveType,
    ProviderCreditNote,
    ProviderInvoice,
)

from tests.support import StubServer

SUBTYPES = {
    "customer_invoice": (CustomerInvoice, "out_invoice"),
    "provider_invoice": (ProviderInvoice, "in_invoice"),
    "customer_credit_note": (CustomerCreditNote, "out_refund"),
    "provider_credit_note": (ProviderCreditNote, "in_refund"),
    "journal_entry": (JournalEntry, "entry"),
}


def test_subtypes_share_model_name() -> None:
    for model, _ in SUBTYPES.values():
        assert model.model_name() == "account.move"


@pytest.mark.parametrize("model,move_type", list(SUBTYPES.values()), ids=list(SUBTYPES))
def test_default_discriminator(model: type[AccountingEntry], move_type: str) -> None:
    assert model.default_discriminator() == move_type
    assert type(model.default_discriminator()) is str


def test_base_type_has_no_discriminator() -> None:
    assert AccountingEntry.default_discriminator() is None


# === where ===


def test_accounting_entry_where_with_raw_domain(server: StubServer) -> None:
    server.stub("account.move", "search_read", [])

    AccountingEntry.where([["state", "=", "posted"]])

    assert server.last_body["domain"] == [["state", "=", "posted"]]


def test_accounting_entry_where_with_keyword_args(server: StubServer) -> None:
    server.stub("account.move", "search_read", [])

    AccountingEntry.where(state="posted")

    assert server.last_body["domain"] == [["state", "=", "posted"]]


def test_accounting_entry_where_with_string_condition(server: StubServer) -> None:
    server.stub("account.move", "search_read", [])

    AccountingEntry.where("amount_total > 1000")

    assert server.last_body["domain"] == [["amount_total", ">", 1000]]


@pytest.mark.parametrize("model,move_type", list(SUBTYPES.values()), ids=list(SUBTYPES))
def test_where_without_conditions_scopes_to_move_type(
    server: StubServer, model: type[AccountingEntry], move_type: str
) -> None:
    server.stub("account.move", "search_read", [])

    model.where()

    assert server.last_body == {"domain": [["move_type", "=", move_type]]}


def test_customer_invoice_where_with_raw_domain(server: StubServer) -> None:
    server.stub("account.move", "search_read", [])

    CustomerInvoice.where([["state", "=", "posted"]])

    assert server.last_body["domain"] == [
        ["move_type", "=", "out_invoice"],
        ["state", "=", "posted"],
    ]


def test_customer_invoice_where_with_string_condition(server: StubServer) -> None:
    server.stub("account.move", "search_read", [])

    CustomerInvoice.where("amount_total > 1000")

    assert server.last_body["domain"] == [
        ["move_type", "=", "out_invoice"],
        ["amount_total", ">", 1000],
    ]


def test_provider_invoice_where_with_keyword_args_and_options(server: StubServer) -> None:
    server.stub("account.move", "search_read", [{"id": 5, "move_type": "in_invoice"}])

    bills = ProviderInvoice.where(state="draft", fields=["name"], limit=3, lang="de_DE")

    assert [bill.id for bill in bills] == [5]
    assert isinstance(bills[0], ProviderInvoice)
    assert server.last_body == {
        "domain": [["move_type", "=", "in_invoice"], ["state", "=", "draft"]],
        "fields": ["name"],
        "limit": 3,
        "context": {"lang": "de_DE"},
    }


def test_find_by_is_scoped(server: StubServer) -> None:
    server.stub("account.move", "search_read", [])

    assert CustomerCreditNote.find_by(name="RINV/001") is None
    assert server.last_body == {
        "domain": [["move_type", "=", "out_refund"], ["name", "=", "RINV/001"]],
        "limit": 1,
    }


# === create ===


def test_subtype_create_sets_move_type(server: StubServer) -> None:
    server.stub("account.move", "create", [10])
    server.stub("account.move", "read", [{"id": 10, "move_type": "out_invoice"}])

    invoice = CustomerInvoice.create(partner_id=42)

    assert isinstance(invoice, CustomerInvoice)
    assert server.bodies[0] == {"vals_list": [{"move_type": "out_invoice", "partner_id": 42}]}


def test_subtype_create_with_mapping(server: StubServer) -> None:
    server.stub("account.move", "create", [11])
    server.stub("account.move", "read", [{"id": 11}])

    JournalEntry.create({"journal_id": 1})

    assert server.bodies[0] == {"vals_list": [{"move_type": "entry", "journal_id": 1}]}


def test_subtype_create_lets_caller_value_win(server: StubServer) -> None:
    server.stub("account.move", "create", [12])
    server.stub("account.move", "read", [{"id": 12}])

    CustomerInvoice.create(move_type="out_refund")

    assert server.bodies[0] == {"vals_list": [{"move_type": "out_refund"}]}


def test_base_create_adds_no_move_type(server: StubServer) -> None:
    server.stub("account.move", "create", [13])
    server.stub("account.move", "read", [{"id": 13}])

    AccountingEntry.create(partner_id=42)

    assert server.bodies[0] == {"vals_list": [{"partner_id": 42}]}


def test_save_on_subtype_sets_move_type(server: StubServer) -> None:
    server.stub("account.move", "create", [14])
    server.stub("account.move", "read", [{"id": 14}])

    invoice = ProviderInvoice(partner_id=3).save()

    assert invoice.id == 14
    assert server.bodies[0] == {"vals_list": [{"move_type": "in_invoice", "partner_id": 3}]}


def test_discriminator_requires_field() -> None:
    with pytest.raises(TypeError):

        class Broken(DiscriminatedModel, discriminator="x"):
            pass


def test_move_type_values() -> None:
    assert MoveType.OUT_INVOICE.value == "out_invoice"
    assert {m.value for m in MoveType} == {value for _, value in SUBTYPES.values()}


# === attachments ===


def test_attach_pdf_from_base64_sets_main_attachment(server: StubServer) -> None:
    server.stub("ir.attachment", "create", [100])
    server.stub("account.move", "write", True)
    invoice = ProviderInvoice(id=42)
    data = base64.b64encode(b"%PDF-1.4").decode()

    attachment = invoice.attach_pdf_from_base64(data, filename="bill.pdf")

    assert isinstance(attachment, Attachment)
    assert attachment.id == 100
    assert server.bodies[0]["vals_list"][0]["mimetype"] == "application/pdf"
    assert server.bodies[0]["vals_list"][0]["res_model"] == "account.move"
    assert server.bodies[1] == {"ids": [42], "vals": {"message_main_attachment_id": 100}}
    assert invoice.message_main_attachment_id == 100


def test_attach_pdf_without_main(server: StubServer) -> None:
    server.stub("ir.attachment", "create", [101])
    invoice = CustomerInvoice(id=7)

    invoice.attach_pdf(io.BytesIO(b"%PDF"), filename="supporting.pdf", set_as_main=False)

    assert server.paths == ["/json/2/ir.attachment/create"]
    vals = server.last_body["vals_list"][0]
    assert vals["name"] == "supporting.pdf"
    assert vals["datas"] == base64.b64encode(b"%PDF").decode()


def test_attach_pdf_derives_filename_from_path(server: StubServer, tmp_path) -> None:
    path = tmp_path / "invoice-2025.pdf"
    path.write_bytes(b"%PDF")
    server.stub("ir.attachment", "create", [102])
    server.stub("account.move", "write", True)

    CustomerInvoice(id=7).attach_pdf(str(path))

    assert server.bodies[0]["vals_list"][0]["name"] == "invoice-2025.pdf"


def test_set_main_attachment_with_id(server: StubServer) -> None:
    server.stub("account.move", "write", True)

    JournalEntry(id=9).set_main_attachment(123)

    assert server.last_body == {"ids": [9], "vals": {"message_main_attachment_id": 123}}


def test_attachments_lists_by_record(server: StubServer) -> None:
    server.stub("ir.attachment", "search_read", [{"id": 1, "name": "a.pdf"}])

    attachments = CustomerInvoice(id=7).attachments(mimetype="application/pdf")

    assert [a.name for a in attachments] == ["a.pdf"]
    assert server.last_body["domain"] == [
        ["res_model", "=", "account.move"],
        ["res_id", "=", 7],
        ["mimetype", "=", "application/pdf"],
    ]


def test_main_attachment_reads_many2one_pair(server: StubServer) -> None:
    server.stub("ir.attachment", "read", [{"id": 55, "name": "main.pdf"}])

    main = CustomerInvoice(id=7, message_main_attachment_id=[55, "main.pdf"]).main_attachment()

    assert main.id == 55
    assert server.last_body == {"ids": [55]}


@pytest.mark.parametrize("value", [None, False, [False, ""]])
def test_main_attachment_none_when_unset(server: StubServer, value: object) -> None:
    assert CustomerInvoice(id=7, message_main_attachment_id=value).main_attachment() is None
    assert server.requests == []
