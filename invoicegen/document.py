"""HTML invoice documents filled in from a template."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from .models import Invoice, format_number
from .services import ProductService
from .storage import StorageError, read_html_template

__all__ = ["InvoiceDocument", "insert_values"]

_ROW_TEMPLATE = (
    "<tr>"
    '<td style="width: 12.5%;">%LP%</td>'
    ' <td style="width: 12.5%;">%Nazwa%</td>'
    ' <td style="width: 12.5%;">%EAN%</td>'
    ' <td style="width: 7.73327%;">%Ilosc%</td>'
    ' <td style="width: 17.2667%; text-align: center;">%CentaJed%</td>'
    ' <td style="width: 12.5%;">%warNet%</td>'
    ' <td style="width: 12.5%;">%vat%</td>'
    ' <td style="width: 12.5%;">%warBrut%</td>'
    "</tr>"
)

HEADER_SECTION = "invoiceNumber"
CONTRACTOR_SECTION = "contractor"
POSITIONS_SECTION = "positionsHeaders"
FOOTER_SECTION = "footeSum"


def insert_values(html: str, values: Mapping[str, str]) -> str:
    """Replace each ``%key%`` in ``html`` with its value, keys in sorted order."""
    result = html
    for key in sorted(values):
        result = result.replace(f"%{key}%", values[key])
    return result


class InvoiceDocument:
    """An invoice rendered into the sections of an HTML template."""

    def __init__(self, invoice: Invoice, product_service: ProductService) -> None:
        self.invoice = invoice
        self._products = product_service

    def _lines(self) -> list[tuple[dict[str, str], float, float]]:
        lines = []
        for number, position in enumerate(self.invoice.positions, start=1):
            product = self._products.get(position.product_id)
            gross = ((100 + product.vat) / 100) * position.value_net
            values = {
                "LP": str(number),
                "Nazwa": product.name,
                "EAN": product.ean,
                "Ilosc": format_number(position.quantity),
                "CentaJed": format_number(position.price_net),
                "warNet": format_number(position.value_net),
                "vat": format_number(product.vat),
                "warBrut": format_number(gross),
            }
            lines.append((values, position.value_net, gross))
        return lines

    def position_rows(self) -> list[str]:
        """Return one HTML table row for each position, numbered from 1."""
        return [insert_values(_ROW_TEMPLATE, values) for values, _, _ in self._lines()]

    @property
    def net_total(self) -> float:
        """Sum of the positions' net values."""
        return sum(net for _, net, _ in self._lines())

    @property
    def gross_total(self) -> float:
        """Sum of the positions' gross values."""
        return sum(gross for _, _, gross in self._lines())

    def render(self, sections: Mapping[str, str]) -> str:
        """Fill the template sections and join them into one HTML document."""
        header = self.invoice.header
        lines = self._lines()
        rows = "".join(insert_values(_ROW_TEMPLATE, values) for values, _, _ in lines)
        parts = [
            insert_values(
                sections.get(HEADER_SECTION, ""),
                {"nrInvoice": str(self.invoice.id)},
            ),
            insert_values(
                sections.get(CONTRACTOR_SECTION, ""),
                {
                    "Imie": header.name,
                    "Nazwisko": header.surname,
                    "Adres": header.address,
                    "NIP": header.nip,
                },
            ),
            insert_values(sections.get(POSITIONS_SECTION, ""), {"content": rows}),
            insert_values(
                sections.get(FOOTER_SECTION, ""),
                {
                    "razemNet": format_number(sum(net for _, net, _ in lines)),
                    "razemBrut": format_number(sum(gross for _, _, gross in lines)),
                },
            ),
        ]
        return "".join(parts)

    def export(
        self,
        template_path: str | os.PathLike[str],
        destination: str | os.PathLike[str],
    ) -> Path:
        """Render the invoice with the template file and write the HTML out."""
        html = self.render(read_html_template(template_path))
        target = Path(destination)
        try:
            target.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"cannot write {target}: {exc}") from exc
        return target