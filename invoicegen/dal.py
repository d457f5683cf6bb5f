"""Record stores that map domain objects onto tab-separated files."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Generic, TypeVar

from .models import Contractor, Invoice, Position, Product, format_number
from .storage import RecordFile

__all__ = ["ContractorStore", "ProductStore", "InvoiceStore", "PositionStore"]

_INTEGER = re.compile(r"[+-]?\d+")

T = TypeVar("T", Contractor, Product, Invoice, Position)


def _field(fields: Sequence[str], index: int) -> str:
    """Return a field of a record, or an empty string if the record is short."""
    return fields[index] if index < len(fields) else ""


def _to_int(text: str) -> int:
    """Parse an integer field; anything that is not an integer reads as 0."""
    text = text.strip()
    return int(text) if _INTEGER.fullmatch(text) else 0


def _to_float(text: str) -> float:
    """Parse a decimal field; anything that is not a number reads as 0.0."""
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


class _RecordStore(ABC, Generic[T]):
    """Common operations of a store backed by one record file."""

    _record_type: Callable[[], T]

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file = RecordFile(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"

    @property
    def path(self) -> Path:
        """The file the records are kept in."""
        return self._file.path

    @abstractmethod
    def _parse(self, fields: Sequence[str]) -> T:
        """Build a record from the fields of one line."""

    @abstractmethod
    def _values(self, record: T) -> list[str]:
        """Return the fields of a record, without its id."""

    def _where(self, predicate: Callable[[T], bool]) -> list[T]:
        return [record for record in self.all() if predicate(record)]

    def all(self) -> list[T]:
        """Return every record in file order."""
        return [self._parse(fields) for fields in self._file.read()]

    def get(self, record_id: int) -> T:
        """Return the record with ``record_id``, or a blank record with id 0."""
        return next(
            (record for record in self.all() if record.id == record_id),
            self._record_type(),
        )

    def add(self, record: T) -> int:
        """Store ``record`` under a fresh id and return that id."""
        return self._file.append(self._values(record))

    def delete(self, record: T) -> None:
        """Remove the stored record with the id of ``record``."""
        self._file.remove(record.id)

    def update(self, record: T) -> None:
        """Overwrite the stored record with the id of ``record``."""
        self._file.modify(record.id, [str(record.id), *self._values(record)])


class ContractorStore(_RecordStore[Contractor]):
    """Contractors: id, name, surname, address, NIP."""

    _record_type = Contractor

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__(path)

    def _parse(self, fields: Sequence[str]) -> Contractor:
        return Contractor(
            id=_to_int(_field(fields, 0)),
            name=_field(fields, 1),
            surname=_field(fields, 2),
            address=_field(fields, 3),
            nip=_field(fields, 4),
        )

    def _values(self, record: Contractor) -> list[str]:
        return [record.name, record.surname, record.address, record.nip]

    def all(self) -> list[Contractor]:
        """Return every contractor in file order."""
        return super().all()

    def get(self, contractor_id: int) -> Contractor:
        """Return the contractor with ``contractor_id``, or a blank one."""
        return super().get(contractor_id)

    def add(self, contractor: Contractor) -> int:
        """Store a new contractor and return its id."""
        return super().add(contractor)

    def delete(self, contractor: Contractor) -> None:
        """Remove the stored contractor with the id of ``contractor``."""
        super().delete(contractor)

    def update(self, contractor: Contractor) -> None:
        """Overwrite the stored contractor with the id of ``contractor``."""
        super().update(contractor)


class ProductStore(_RecordStore[Product]):
    """Products: id, name, EAN, manufacturer, net price, VAT, gross price."""

    _record_type = Product

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__(path)

    def _parse(self, fields: Sequence[str]) -> Product:
        return Product(
            id=_to_int(_field(fields, 0)),
            name=_field(fields, 1),
            ean=_field(fields, 2),
            manufacturer=_field(fields, 3),
            price_net=_to_float(_field(fields, 4)),
            vat=_to_float(_field(fields, 5)),
            price_gross=_to_float(_field(fields, 6)),
        )

    def _values(self, record: Product) -> list[str]:
        return [
            record.name,
            record.ean,
            record.manufacturer,
            format_number(record.price_net),
            format_number(record.vat),
            format_number(record.price_gross),
        ]

    def all(self) -> list[Product]:
        """Return every product in file order."""
        return super().all()

    def get(self, product_id: int) -> Product:
        """Return the product with ``product_id``, or a blank one."""
        return super().get(product_id)

    def add(self, product: Product) -> int:
        """Store a new product and return its id."""
        return super().add(product)

    def delete(self, product: Product) -> None:
        """Remove the stored product with the id of ``product``."""
        super().delete(product)

    def update(self, product: Product) -> None:
        """Overwrite the stored product with the id of ``product``."""
        super().update(product)


class InvoiceStore(_RecordStore[Invoice]):
    """Invoice bodies: id, payment terms, contractor id."""

    _record_type = Invoice

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__(path)

    def _parse(self, fields: Sequence[str]) -> Invoice:
        return Invoice(
            id=_to_int(_field(fields, 0)),
            payment=_field(fields, 1),
            contractor_id=_to_int(_field(fields, 2)),
        )

    def _values(self, record: Invoice) -> list[str]:
        return [record.payment, str(record.contractor_id)]

    def all(self) -> list[Invoice]:
        """Return every invoice body in file order."""
        return super().all()

    def get(self, invoice_id: int) -> Invoice:
        """Return the invoice with ``invoice_id``, or a blank one."""
        return super().get(invoice_id)

    def add(self, invoice: Invoice) -> int:
        """Store a new invoice body and return its id."""
        return super().add(invoice)

    def delete(self, invoice: Invoice) -> None:
        """Remove the stored invoice with the id of ``invoice``."""
        super().delete(invoice)

    def update(self, invoice: Invoice) -> None:
        """Overwrite the stored invoice with the id of ``invoice``."""
        super().update(invoice)

    def by_contractor(self, contractor_id: int) -> list[Invoice]:
        """Return the invoices issued to ``contractor_id``."""
        return self._where(lambda invoice: invoice.contractor_id == contractor_id)


class PositionStore(_RecordStore[Position]):
    """Invoice positions: id, invoice id, product id, quantity, net price, net value."""

    _record_type = Position

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__(path)

    def _parse(self, fields: Sequence[str]) -> Position:
        return Position(
            id=_to_int(_field(fields, 0)),
            invoice_id=_to_int(_field(fields, 1)),
            product_id=_to_int(_field(fields, 2)),
            quantity=_to_int(_field(fields, 3)),
            price_net=_to_float(_field(fields, 4)),
            value_net=_to_float(_field(fields, 5)),
        )

    def _values(self, record: Position) -> list[str]:
        return [
            str(record.invoice_id),
            str(record.product_id),
            str(record.quantity),
            format_number(record.price_net),
            format_number(record.value_net),
        ]

    def all(self) -> list[Position]:
        """Return every position in file order."""
        return super().all()

    def get(self, position_id: int) -> Position:
        """Return the position with ``position_id``, or a blank one."""
        return super().get(position_id)

    def add(self, position: Position) -> int:
        """Store a new position and return its id."""
        return super().add(position)

    def delete(self, position: Position) -> None:
        """Remove the stored position with the id of ``position``."""
        super().delete(position)

    def update(self, position: Position) -> None:
        """Overwrite the stored position with the id of ``position``."""
        super().update(position)

    def for_invoice(self, invoice_id: int) -> list[Position]:
        """Return the positions that belong to ``invoice_id``."""
        return self._where(lambda position: position.invoice_id == invoice_id)

    def with_product(self, product_id: int) -> list[Position]:
        """Return the positions that refer to ``product_id``."""
        return self._where(lambda position: position.product_id == product_id)

    def extend(self, positions: Iterable[Position]) -> list[int]:
        """Store several positions and return their ids in order."""
        return [self.add(position) for position in positions]