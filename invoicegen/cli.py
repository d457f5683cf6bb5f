"""Command-line front end: list, add, delete and print invoices and their parts."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .document import InvoiceDocument
from .draft import InvoiceDraft
from .models import Contractor, Product
from .repository import Database
from .services import (
    ContractorInUseError,
    ContractorService,
    InvoiceService,
    ProductInUseError,
    ProductService,
)
from .storage import RecordNotFoundError, StorageError
from .tables import (
    Table,
    contractor_card,
    contractor_table,
    invoice_position_table,
    invoice_table,
    product_table,
)

__all__ = ["main"]

DEFAULT_DATABASE = "Database"


class _Services:
    """The services of one database directory."""

    def __init__(self, directory: str) -> None:
        database = Database(directory)
        self.contractors = ContractorService(database)
        self.products = ProductService(database)
        self.invoices = InvoiceService(database)


class _CommandFailed(Exception):
    """A command could not do its work; the message is shown to the user."""


def _print_table(table: Table) -> None:
    if table.headers:
        print("\t".join(table.headers))
    for row in table:
        print("\t".join(row))


def _parse_line(text: str) -> tuple[int, float]:
    product_text, _, quantity_text = text.partition(":")
    try:
        product_id = int(product_text)
        quantity = float(quantity_text) if quantity_text else 1.0
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected PRODUCT_ID or PRODUCT_ID:QUANTITY, got {text!r}"
        ) from None
    if quantity.is_integer():
        quantity = int(quantity)
    return product_id, quantity


def _cmd_contractors(services: _Services, args: argparse.Namespace) -> None:
    _print_table(contractor_table(services.contractors))


def _cmd_products(services: _Services, args: argparse.Namespace) -> None:
    _print_table(product_table(services.products))


def _cmd_invoices(services: _Services, args: argparse.Namespace) -> None:
    _print_table(invoice_table(services.invoices))


def _cmd_add_contractor(services: _Services, args: argparse.Namespace) -> None:
    contractor = Contractor(
        name=args.name, surname=args.surname, address=args.address, nip=args.nip
    )
    try:
        services.contractors.add(contractor)
    except StorageError as exc:
        raise _CommandFailed("Kontrahent nie został dodany.") from exc
    print("Kontrahent został dodany.")


def _cmd_add_product(services: _Services, args: argparse.Namespace) -> None:
    product = Product(
        name=args.name,
        ean=args.ean,
        manufacturer=args.manufacturer,
        price_net=args.price_net,
        vat=args.vat,
    )
    product.price_gross = product.gross_from_net()
    try:
        services.products.add(product)
    except StorageError as exc:
        raise _CommandFailed("Produkt nie został dodany.") from exc
    print("Produkt został dodany.")


def _cmd_delete_contractor(services: _Services, args: argparse.Namespace) -> None:
    try:
        services.contractors.delete(Contractor(id=args.id))
    except ContractorInUseError as exc:
        raise _CommandFailed(
            "Kontrahent nie może zostać usunięty, był użyty na fakturze."
        ) from exc
    except StorageError as exc:
        raise _CommandFailed(f"Kontrahent nie został usunięty: {exc}") from exc
    print("Kontrahent został usunięty.")


def _cmd_delete_product(services: _Services, args: argparse.Namespace) -> None:
    try:
        services.products.delete(Product(id=args.id))
    except (ProductInUseError, StorageError) as exc:
        raise _CommandFailed("Produkt nie może być usunięty.") from exc
    print("Produkt został usunięty.")


def _cmd_new_invoice(services: _Services, args: argparse.Namespace) -> None:
    draft = InvoiceDraft(services.contractors, services.products, services.invoices)
    try:
        if args.contractor is not None:
            draft.select_contractor(args.contractor)
        for product_id, quantity in args.line:
            draft.add_product(product_id)
            draft.set_quantity(len(draft.lines()) - 1, quantity)
        invoice_id = draft.submit(args.payment)
    except (LookupError, ValueError, StorageError) as exc:
        raise _CommandFailed(f"Faktura nie została dodana: {exc}") from exc
    print(f"Faktura została dodana. ({invoice_id})")


def _load_invoice(services: _Services, invoice_id: int):
    invoice = services.invoices.get(invoice_id)
    if invoice.id == 0:
        raise _CommandFailed(f"Brak faktury nr {invoice_id}.")
    return invoice


def _cmd_show_invoice(services: _Services, args: argparse.Namespace) -> None:
    invoice = _load_invoice(services, args.id)
    print(f"Faktura nr:{invoice.id}")
    print(f"Płatność\t{invoice.payment}")
    _print_table(contractor_card(invoice.header))
    _print_table(invoice_position_table(invoice, services.products))


def _cmd_export_invoice(services: _Services, args: argparse.Namespace) -> None:
    invoice = _load_invoice(services, args.id)
    try:
        target = InvoiceDocument(invoice, services.products).export(
            args.template, args.output
        )
    except StorageError as exc:
        raise _CommandFailed(f"Nie wygenerowano dokumentu: {exc}") from exc
    print(f"Wygenerowano {target}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invoicegen", description="Manage contractors, products and invoices."
    )
    parser.add_argument(
        "--db",
        default=DEFAULT_DATABASE,
        help="directory holding the record files (default: %(default)s)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("contractors", help="list contractors").set_defaults(
        handler=_cmd_contractors
    )
    commands.add_parser("products", help="list products").set_defaults(
        handler=_cmd_products
    )
    commands.add_parser("invoices", help="list invoices").set_defaults(
        handler=_cmd_invoices
    )

    add_contractor = commands.add_parser("add-contractor", help="add a contractor")
    add_contractor.add_argument("--name", default="")
    add_contractor.add_argument("--surname", default="")
    add_contractor.add_argument("--address", default="")
    add_contractor.add_argument("--nip", default="")
    add_contractor.set_defaults(handler=_cmd_add_contractor)

    add_product = commands.add_parser("add-product", help="add a product")
    add_product.add_argument("--name", default="")
    add_product.add_argument("--ean", default="")
    add_product.add_argument("--manufacturer", default="")
    add_product.add_argument("--price-net", type=float, default=0.0)
    add_product.add_argument("--vat", type=int, default=0)
    add_product.set_defaults(handler=_cmd_add_product)

    delete_contractor = commands.add_parser(
        "delete-contractor", help="delete a contractor not used on an invoice"
    )
    delete_contractor.add_argument("id", type=int)
    delete_contractor.set_defaults(handler=_cmd_delete_contractor)

    delete_product = commands.add_parser(
        "delete-product", help="delete a product not used on an invoice"
    )
    delete_product.add_argument("id", type=int)
    delete_product.set_defaults(handler=_cmd_delete_product)

    new_invoice = commands.add_parser("new-invoice", help="issue a new invoice")
    new_invoice.add_argument("--payment", default="")
    new_invoice.add_argument("--contractor", type=int)
    new_invoice.add_argument(
        "--line",
        type=_parse_line,
        action="append",
        default=[],
        metavar="PRODUCT_ID[:QUANTITY]",
    )
    new_invoice.set_defaults(handler=_cmd_new_invoice)

    show_invoice = commands.add_parser("show-invoice", help="show one invoice")
    show_invoice.add_argument("id", type=int)
    show_invoice.set_defaults(handler=_cmd_show_invoice)

    export_invoice = commands.add_parser(
        "export-invoice", help="render an invoice into an HTML document"
    )
    export_invoice.add_argument("id", type=int)
    export_invoice.add_argument("--template", required=True)
    export_invoice.add_argument("--output", required=True)
    export_invoice.set_defaults(handler=_cmd_export_invoice)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command; return 0 on success and 1 when the command failed."""
    args = _build_parser().parse_args(argv)
    services = _Services(args.db)
    try:
        args.handler(services, args)
    except _CommandFailed as exc:
        print(f"Uwaga: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(f"Uwaga: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())