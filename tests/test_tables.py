import pytest

from invoicegen.models import Contractor, Invoice, Position, Product
from invoicegen.repository import Database
from invoicegen.services import ContractorService, InvoiceService, ProductService
from invoicegen.tables import (
    Table,
    contractor_card,
    contractor_table,
    invoice_position_table,
    invoice_table,
    product_table,
    update_invoice,
)


@pytest.fixture
def services(tmp_path):
    db = Database(tmp_path)
    return ContractorService(db), ProductService(db), InvoiceService(db)


@pytest.fixture
def stocked(services):
    contractors, products, invoices = services
    cid = contractors.add(
        Contractor(name="Jan", surname="Kowalski", address="Polna 1", nip="1234567890")
    )
    pid = products.add(
        Product(name="Pen", ean="5900000000001", manufacturer="Acme",
                price_net=2.5, vat=23.0, price_gross=3.075)
    )
    iid = invoices.add(
        Invoice(payment="cash", contractor_id=cid,
                positions=[Position(product_id=pid, quantity=4,
                                    price_net=2.5, value_net=10.0)])
    )
    return cid, pid, iid


def test_contractor_table_headers_and_rows(services, stocked):
    contractors, _, _ = services
    cid, _, _ = stocked
    table = contractor_table(contractors)
    assert table.headers == ("ID", "Imie", "Nazwisko", "Adres", "NIP")
    assert table.rows == ((str(cid), "Jan", "Kowalski", "Polna 1", "1234567890"),)


def test_empty_contractor_table(services):
    contractors, _, _ = services
    assert len(contractor_table(contractors)) == 0


def test_product_table(services, stocked):
    _, products, _ = services
    table = product_table(products)
    assert table.headers[-1] == "Cena Brutton"
    assert table.column("Nazwa") == ["Pen"]
    assert table.column("Cena Netto") == ["2.5"]
    assert table.column("Stawka VAT") == ["23"]


def test_invoice_table_includes_contractor(services, stocked):
    _, _, invoices = services
    _, _, iid = stocked
    table = invoice_table(invoices)
    assert table.headers == ("ID", "Płatność", "Imie", "Nazwisko", "Adres", "NIP")
    assert list(table) == [
        (str(iid), "cash", "Jan", "Kowalski", "Polna 1", "1234567890")
    ]


def test_invoice_position_table(services, stocked):
    _, products, invoices = services
    _, _, iid = stocked
    table = invoice_position_table(invoices.get(iid), products)
    assert table.headers == ("Nazwa", "EAN", "Ilość", "Cena Netto", "Wart. Netto")
    assert table.rows == (("Pen", "5900000000001", "4", "2.5", "10"),)


def test_contractor_card():
    card = contractor_card(Contractor(name="Anna", surname="Nowak",
                                      address="Lesna 2", nip="111"))
    assert card.rows == (
        ("Imie", "Anna"), ("Nazwisko", "Nowak"), ("Adres", "Lesna 2"), ("NIP", "111")
    )


def test_column_unknown_header():
    table = Table(headers=("a",), rows=(("1",),))
    with pytest.raises(KeyError):
        table.column("b")


def test_table_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Table(headers=("a", "b"), rows=(("1",),))


def test_update_invoice_round_trip(services, stocked):
    contractors, products, invoices = services
    _, _, iid = stocked
    other = contractors.add(Contractor(name="Ewa", surname="Zielinska", nip="222"))
    invoice = invoices.get(iid)
    rows = [list(row) for row in invoice_position_table(invoice, products)]
    rows[0][2] = "3"
    update_invoice(invoices, contractors, invoice, "transfer", other, rows)
    stored = invoices.get(iid)
    assert stored.payment == "transfer"
    assert stored.contractor_id == other
    assert stored.header.name == "Ewa"
    assert stored.positions[0].quantity == 3
    assert stored.positions[0].value_net == pytest.approx(3 * 2.5)
    assert stored.positions[0].id == invoice.positions[0].id


def test_update_invoice_fractional_quantity(services, stocked):
    contractors, products, invoices = services
    cid, _, iid = stocked
    invoice = invoices.get(iid)
    rows = [list(row) for row in invoice_position_table(invoice, products)]
    rows[0][2] = "1.5"
    updated = update_invoice(invoices, contractors, invoice, "cash", cid, rows)
    assert updated.positions[0].quantity == 0
    assert updated.positions[0].value_net == pytest.approx(1.5 * 2.5)


def test_update_invoice_row_count_mismatch(services, stocked):
    contractors, _, invoices = services
    cid, _, iid = stocked
    with pytest.raises(ValueError):
        update_invoice(invoices, contractors, invoices.get(iid), "cash", cid, [])