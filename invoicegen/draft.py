"""Building a new invoice: choosing a contractor and picking product lines."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .models import Contractor, Invoice, Position, Product
from .services import ContractorService, InvoiceService, ProductService

__all__ = ["DraftLine", "InvoiceDraft"]


@dataclass(frozen=True)
class DraftLine:
    """A product picked for the invoice together with its quantity."""

    product: Product
    quantity: float = 1

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def ean(self) -> str:
        return self.product.ean

    @property
    def price_net(self) -> float:
        return self.product.price_net

    @property
    def value_net(self) -> float:
        """Net value of the line: net unit price times quantity."""
        return self.product.price_net * self.quantity


def _whole_quantity(quantity: float) -> int:
    """Return the quantity as stored on a position; fractions store as 0."""
    if isinstance(quantity, int):
        return quantity
    return int(quantity) if float(quantity).is_integer() else 0


class InvoiceDraft:
    """An invoice being put together before it is stored."""

    def __init__(
        self,
        contractor_service: ContractorService,
        product_service: ProductService,
        invoice_service: InvoiceService,
    ) -> None:
        self._contractors = contractor_service
        self._products = product_service
        self._invoices = invoice_service
        self._lines: list[DraftLine] = []
        known = contractor_service.all()
        self.contractor: Contractor = known[0] if known else Contractor()

    def __repr__(self) -> str:
        return (
            f"InvoiceDraft(contractor={self.contractor.id}, "
            f"lines={len(self._lines)})"
        )

    def _picked_ids(self) -> set[int]:
        return {line.product.id for line in self._lines}

    def available_products(self) -> list[Product]:
        """Return the products that are not on the draft yet."""
        picked = self._picked_ids()
        return [
            product for product in self._products.all() if product.id not in picked
        ]

    def add_product(self, product_id: int) -> DraftLine:
        """Add a line for ``product_id`` with a quantity of 1 and return it."""
        if product_id in self._picked_ids():
            raise ValueError(f"product {product_id} is already on the invoice")
        product = self._products.get(product_id)
        if product.id == 0:
            raise LookupError(f"no product {product_id}")
        line = DraftLine(product=product, quantity=1)
        self._lines.append(line)
        return line

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._lines):
            raise IndexError(f"no line {row} on the invoice")

    def set_quantity(self, row: int, quantity: float) -> DraftLine:
        """Change the quantity of the line at ``row`` and return the new line."""
        self._check_row(row)
        line = replace(self._lines[row], quantity=quantity)
        self._lines[row] = line
        return line

    def remove_line(self, row: int) -> DraftLine:
        """Remove the line at ``row`` and return it."""
        self._check_row(row)
        return self._lines.pop(row)

    def lines(self) -> list[DraftLine]:
        """Return the lines of the draft in the order they were added."""
        return list(self._lines)

    def select_contractor(self, contractor_id: int) -> Contractor:
        """Make ``contractor_id`` the invoice's contractor and return it."""
        contractor = self._contractors.get(contractor_id)
        if contractor.id == 0:
            raise LookupError(f"no contractor {contractor_id}")
        self.contractor = contractor
        return contractor

    def submit(self, payment: str) -> int:
        """Store the invoice with its positions, clear the lines, return the id."""
        contractor_id = self.contractor.id
        invoice = Invoice(
            payment=payment,
            contractor_id=contractor_id,
            header=self._contractors.get(contractor_id),
            positions=[
                Position(
                    product_id=line.product.id,
                    quantity=_whole_quantity(line.quantity),
                    price_net=line.price_net,
                    value_net=line.value_net,
                )
                for line in self._lines
            ],
        )
        invoice_id = self._invoices.add(invoice)
        self._lines.clear()
        return invoice_id