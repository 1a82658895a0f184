"""Contacts, products and projects."""

from ..model import Model


class Contact(Model, model_name="res.partner"):
    """A person or company.

    Example:
        >>> Contact.where(is_company=True)
        >>> Contact.create(name="Acme Corp", is_company=True)
    """


class Product(Model, model_name="product.product"):
    """A product variant."""


class Project(Model, model_name="project.project"):
    pass
