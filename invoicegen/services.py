"""Business rules on top of the record stores."""

from __future__ import annotations

from dataclasses import replace

from .models import Contractor, Invoice, Product
from .repository import Database

__all__ = [
    "ContractorInUseError",
    "ProductInUseError",
    "ContractorService",
    "ProductService",
    "InvoiceService",
]


class ContractorInUseError(Exception):
    """The contractor appears on an invoice and cannot be deleted."""


class ProductInUseError(Exception):
    """The product appears on an invoice position and cannot be deleted."""


class ContractorService:
    """Contractor operations; a contractor on an invoice is kept."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def get(self, contractor_id: int) -> Contractor:
        """Return the contractor with ``contractor_id``, or a blank one."""
        return self._db.contractors().get(contractor_id)

    def all(self) -> list[Contractor]:
        """Return every contractor."""
        return self._db.contractors().all()

    def add(self, contractor: Contractor) -> int:
        """Store a new contractor and return its id."""
        return self._db.contractors().add(contractor)

    def delete(self, contractor: Contractor) -> None:
        """Delete a contractor that no invoice refers to."""
        if self._db.invoices().by_contractor(contractor.id):
            raise ContractorInUseError(
                f"contractor {contractor.id} is used on an invoice"
            )
        self._db.contractors().delete(contractor)

    def update(self, contractor: Contractor) -> None:
        """Overwrite the stored contractor."""
        self._db.contractors().update(contractor)


class ProductService:
    """Product operations; a product on an invoice position is kept."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def get(self, product_id: int) -> Product:
        """Return the product with ``product_id``, or a blank one."""
        return self._db.products().get(product_id)

    def all(self) -> list[Product]:
        """Return every product."""
        return self._db.products().all()

    def add(self, product: Product) -> int:
        """Store a new product and return its id."""
        return self._db.products().add(product)

    def delete(self, product: Product) -> None:
        """Delete a product that no invoice position refers to."""
        if self._db.positions().with_product(product.id):
            raise ProductInUseError(f"product {product.id} is used on an invoice")
        self._db.products().delete(product)

    def update(self, product: Product) -> None:
        """Overwrite the stored product."""
        self._db.products().update(product)


class InvoiceService:
    """Invoices together with their contractor header and positions."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def _complete(self, invoice: Invoice, invoice_id: int) -> Invoice:
        invoice.header = self._db.contractors().get(invoice.contractor_id)
        invoice.positions = self._db.positions().for_invoice(invoice_id)
        return invoice

    def get(self, invoice_id: int) -> Invoice:
        """Return the invoice with its contractor header and positions."""
        return self._complete(self._db.invoices().get(invoice_id), invoice_id)

    def all(self) -> list[Invoice]:
        """Return every invoice with its contractor header and positions."""
        return [
            self._complete(invoice, invoice.id)
            for invoice in self._db.invoices().all()
        ]

    def add(self, invoice: Invoice) -> int:
        """Store the invoice and its positions; return the new invoice id."""
        invoice_id = self._db.invoices().add(invoice)
        positions = self._db.positions()
        for position in invoice.positions:
            positions.add(replace(position, invoice_id=invoice_id))
        return invoice_id

    def delete(self, invoice: Invoice) -> None:
        """Remove the stored invoice body."""
        self._db.invoices().delete(invoice)

    def update(self, invoice: Invoice) -> None:
        """Overwrite the invoice body and each of its positions."""
        self._db.invoices().update(invoice)
        positions = self._db.positions()
        for position in invoice.positions:
            positions.update(replace(position, invoice_id=invoice.id))