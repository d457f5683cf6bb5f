"""Access to all record stores kept in one database directory."""

from __future__ import annotations

import os
from pathlib import Path

from .dal import ContractorStore, InvoiceStore, PositionStore, ProductStore

__all__ = ["Database"]

CONTRACTORS_FILE = "contractors.txt"
PRODUCTS_FILE = "products.txt"
INVOICES_FILE = "Invoices.txt"
POSITIONS_FILE = "InvoicePositions.txt"


class Database:
    """A directory holding the contractor, product, invoice and position files."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)
        self._contractors = ContractorStore(self.directory / CONTRACTORS_FILE)
        self._products = ProductStore(self.directory / PRODUCTS_FILE)
        self._invoices = InvoiceStore(self.directory / INVOICES_FILE)
        self._positions = PositionStore(self.directory / POSITIONS_FILE)

    def __repr__(self) -> str:
        return f"Database({str(self.directory)!r})"

    def contractors(self) -> ContractorStore:
        """Return the contractor store."""
        return self._contractors

    def products(self) -> ProductStore:
        """Return the product store."""
        return self._products

    def invoices(self) -> InvoiceStore:
        """Return the invoice store."""
        return self._invoices

    def positions(self) -> PositionStore:
        """Return the invoice position store."""
        return self._positions