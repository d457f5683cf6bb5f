"""Tabular views of contractors, products and invoices, and invoice edits."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from .models import Contractor, Invoice, Position, format_number
from .services import ContractorService, InvoiceService, ProductService

__all__ = [
    "Table",
    "contractor_table",
    "product_table",
    "invoice_table",
    "invoice_position_table",
    "contractor_card",
    "update_invoice",
]

_INTEGER = re.compile(r"[+-]?\d+")

CONTRACTOR_HEADERS = ("ID", "Imie", "Nazwisko", "Adres", "NIP")
PRODUCT_HEADERS = (
    "ID",
    "Nazwa",
    "Kod EAN",
    "Producent",
    "Cena Netto",
    "Stawka VAT",
    "Cena Brutton",
)
INVOICE_HEADERS = ("ID", "Płatność", "Imie", "Nazwisko", "Adres", "NIP")
POSITION_HEADERS = ("Nazwa", "EAN", "Ilość", "Cena Netto", "Wart. Netto")
CARD_LABELS = ("Imie", "Nazwisko", "Adres", "NIP")

_QUANTITY_COLUMN = 2
_PRICE_COLUMN = 3


@dataclass(frozen=True)
class Table:
    """Rows of text cells under optional column headers."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    def __post_init__(self) -> None:
        if self.headers:
            width = len(self.headers)
            for row in self.rows:
                if len(row) != width:
                    raise ValueError(
                        f"row has {len(row)} cells, table has {width} columns"
                    )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        return iter(self.rows)

    def column(self, header: str) -> list[str]:
        """Return the cells of the column named ``header``."""
        try:
            index = self.headers.index(header)
        except ValueError:
            raise KeyError(header) from None
        return [row[index] for row in self.rows]


def _to_int(text: str) -> int:
    text = text.strip()
    return int(text) if _INTEGER.fullmatch(text) else 0


def _to_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


def contractor_table(contractor_service: ContractorService) -> Table:
    """Return every contractor as a table row."""
    return Table(
        headers=CONTRACTOR_HEADERS,
        rows=tuple(
            (str(c.id), c.name, c.surname, c.address, c.nip)
            for c in contractor_service.all()
        ),
    )


def product_table(product_service: ProductService) -> Table:
    """Return every product as a table row."""
    return Table(
        headers=PRODUCT_HEADERS,
        rows=tuple(
            (
                str(p.id),
                p.name,
                p.ean,
                p.manufacturer,
                format_number(p.price_net),
                format_number(p.vat),
                format_number(p.price_gross),
            )
            for p in product_service.all()
        ),
    )


def invoice_table(invoice_service: InvoiceService) -> Table:
    """Return every invoice with its contractor's details as a table row."""
    return Table(
        headers=INVOICE_HEADERS,
        rows=tuple(
            (
                str(inv.id),
                inv.payment,
                inv.header.name,
                inv.header.surname,
                inv.header.address,
                inv.header.nip,
            )
            for inv in invoice_service.all()
        ),
    )


def invoice_position_table(invoice: Invoice, product_service: ProductService) -> Table:
    """Return the invoice's positions with product name, EAN and net value."""
    rows = []
    for position in invoice.positions:
        product = product_service.get(position.product_id)
        rows.append(
            (
                product.name,
                product.ean,
                format_number(position.quantity),
                format_number(position.price_net),
                format_number(position.price_net * position.quantity),
            )
        )
    return Table(headers=POSITION_HEADERS, rows=tuple(rows))


def contractor_card(contractor: Contractor) -> Table:
    """Return the contractor's details as label and value pairs."""
    values = (contractor.name, contractor.surname, contractor.address, contractor.nip)
    return Table(headers=(), rows=tuple(zip(CARD_LABELS, values)))


def update_invoice(
    invoice_service: InvoiceService,
    contractor_service: ContractorService,
    invoice: Invoice,
    payment: str,
    contractor_id: int,
    rows: Iterable[Sequence[str]],
) -> Invoice:
    """Store edited payment, contractor and position rows for ``invoice``.

    Each row is a position table row whose quantity and net price cells
    may have been edited; the net value is recomputed from them.
    """
    rows = list(rows)
    if len(rows) != len(invoice.positions):
        raise ValueError(
            f"{len(rows)} rows given for {len(invoice.positions)} positions"
        )
    positions = []
    for original, row in zip(invoice.positions, rows):
        if len(row) <= _PRICE_COLUMN:
            raise ValueError("row lacks quantity or net price")
        quantity_text = row[_QUANTITY_COLUMN]
        price_net = _to_float(row[_PRICE_COLUMN])
        positions.append(
            Position(
                id=original.id,
                invoice_id=invoice.id,
                product_id=original.product_id,
                quantity=_to_int(quantity_text),
                price_net=price_net,
                value_net=_to_float(quantity_text) * price_net,
            )
        )
    updated = Invoice(
        id=invoice.id,
        payment=payment,
        contractor_id=contractor_id,
        header=contractor_service.get(contractor_id),
        positions=positions,
    )
    invoice_service.update(updated)
    return updated