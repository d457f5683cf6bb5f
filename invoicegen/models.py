"""Domain records: contractors, products, invoice positions and invoices."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["Contractor", "Product", "Position", "Invoice", "format_number"]


def format_number(value: int | float) -> str:
    """Render a number the way it is stored and shown.

    Integers are written in full; other numbers use the general format
    with six significant digits, so ``100.0`` becomes ``"100"`` and
    ``1.5`` stays ``"1.5"``.
    """
    if isinstance(value, bool):
        raise TypeError("format_number expects a number, not a bool")
    if isinstance(value, int):
        return str(value)
    return format(float(value), "g")


@dataclass
class Contractor:
    """A business partner an invoice is issued to."""

    id: int = 0
    name: str = ""
    surname: str = ""
    address: str = ""
    nip: str = ""


@dataclass
class Product:
    """A sellable product with its net price, VAT rate and gross price."""

    id: int = 0
    name: str = ""
    manufacturer: str = ""
    ean: str = ""
    price_net: float = 0.0
    price_gross: float = 0.0
    vat: float = 0.0

    def gross_from_net(self) -> float:
        """Return the gross price computed from the net price and VAT rate."""
        return (self.price_net * (100 + self.vat)) / 100


@dataclass
class Position:
    """One line of an invoice: a product, its quantity and net amounts."""

    id: int = 0
    invoice_id: int = 0
    product_id: int = 0
    quantity: int = 0
    price_net: float = 0.0
    value_net: float = 0.0


@dataclass
class Invoice:
    """An invoice with its payment terms, contractor and positions."""

    id: int = 0
    payment: str = ""
    contractor_id: int = 0
    header: Contractor = field(default_factory=Contractor)
    positions: list[Position] = field(default_factory=list)