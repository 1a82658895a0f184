"""File attachments (ir.attachment)."""

import base64
from pathlib import Path
from typing import Any, BinaryIO, Union

from ..exceptions import NotFoundError
from ..model import Model, lookup_model

FileSource = Union[str, Path, BinaryIO]


class Attachment(Model, model_name="ir.attachment"):
    """A file linked to any record.

    Example:
        >>> invoice = ProviderInvoice.find(42)
        >>> Attachment.create_for(
        ...     invoice, "/path/to/file.pdf", filename="invoice.pdf", mimetype="application/pdf"
        ... )
        >>> Attachment.for_record(invoice, mimetype="application/pdf")
    """

    @classmethod
    def create_for(
        cls,
        record: Model,
        source: FileSource,
        *,
        filename: str,
        mimetype: str,
    ) -> "Attachment":
        """Attach a file given as a path or a readable binary object."""
        data = base64.b64encode(read_file_data(source)).decode("ascii")
        return cls.create_from_base64(record, data, filename=filename, mimetype=mimetype)

    @classmethod
    def create_from_base64(
        cls,
        record: Model,
        data: str,
        *,
        filename: str,
        mimetype: str,
    ) -> "Attachment":
        """Attach base64-encoded file content to a record.

        The server cannot read back the binary ``datas`` field, so the
        returned attachment is built from the submitted values and the new
        id instead of a fresh read.
        """
        attrs: dict[str, Any] = {
            "name": filename,
            "type": "binary",
            "datas": data,
            "res_model": type(record).model_name(),
            "res_id": record.id,
            "mimetype": mimetype,
        }
        ids = cls.execute("create", {"vals_list": [attrs]})
        if not ids:
            raise NotFoundError(f"{cls.model_name()} create returned no id")
        attrs.pop("datas")
        return cls(attrs, id=ids[0])

    @classmethod
    def for_record(cls, record: Model, mimetype: str | None = None) -> list["Attachment"]:
        """List the attachments of a record, optionally of one MIME type."""
        domain: list[Any] = [
            ("res_model", "=", type(record).model_name()),
            ("res_id", "=", record.id),
        ]
        if mimetype:
            domain.append(("mimetype", "=", mimetype))
        return cls.where(domain)

    def owner(self) -> Model:
        """Fetch the record this attachment belongs to."""
        return lookup_model(self.res_model).find(self.res_id)


def read_file_data(source: FileSource) -> bytes:
    """Read binary content from a path or a readable object."""
    if hasattr(source, "read"):
        return source.read()
    return Path(source).read_bytes()
