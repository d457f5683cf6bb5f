from pathlib import Path

import pytest

from invoicegen.dal import ContractorStore, InvoiceStore, PositionStore, ProductStore
from invoicegen.models import Contractor, Invoice, Position, Product
from invoicegen.storage import RecordNotFoundError


@pytest.fixture
def contractors(tmp_path: Path) -> ContractorStore:
    return ContractorStore(tmp_path / "contractors.txt")


@pytest.fixture
def products(tmp_path: Path) -> ProductStore:
    return ProductStore(tmp_path / "products.txt")


@pytest.fixture
def invoices(tmp_path: Path) -> InvoiceStore:
    return InvoiceStore(tmp_path / "Invoices.txt")


@pytest.fixture
def positions(tmp_path: Path) -> PositionStore:
    return PositionStore(tmp_path / "InvoicePositions.txt")


def _contractor(name: str = "Jan") -> Contractor:
    return Contractor(name=name, surname="Kowalski", address="Ulica 1", nip="1234567890")


def test_missing_file_has_no_contractors(contractors):
    assert contractors.all() == []


def test_contractor_add_and_get_round_trip(contractors):
    new_id = contractors.add(_contractor())
    stored = contractors.get(new_id)
    assert stored == Contractor(
        id=new_id, name="Jan", surname="Kowalski", address="Ulica 1", nip="1234567890"
    )


def test_contractor_file_layout(contractors):
    new_id = contractors.add(_contractor())
    text = contractors.path.read_text(encoding="utf-8")
    assert text == f"{new_id}\tJan\tKowalski\tUlica 1\t1234567890\n"


def test_first_id_is_one_and_ids_increase(contractors):
    first = contractors.add(_contractor("A"))
    second = contractors.add(_contractor("B"))
    assert first == 1
    assert second == first + 1
    assert [c.name for c in contractors.all()] == ["A", "B"]


def test_get_unknown_contractor_returns_blank(contractors):
    contractors.add(_contractor())
    assert contractors.get(999) == Contractor()


def test_contractor_update(contractors):
    new_id = contractors.add(_contractor())
    changed = Contractor(id=new_id, name="Anna", surname="Nowak", address="Rynek 2", nip="999")
    contractors.update(changed)
    assert contractors.get(new_id) == changed
    assert len(contractors.all()) == 1


def test_contractor_update_missing_raises(contractors):
    contractors.add(_contractor())
    with pytest.raises(RecordNotFoundError):
        contractors.update(Contractor(id=42, name="X"))


def test_contractor_delete(contractors):
    keep = contractors.add(_contractor("Keep"))
    drop = contractors.add(_contractor("Drop"))
    contractors.delete(Contractor(id=drop))
    assert [c.id for c in contractors.all()] == [keep]


def test_contractor_delete_missing_raises(contractors):
    contractors.add(_contractor())
    with pytest.raises(RecordNotFoundError):
        contractors.delete(Contractor(id=77))


def test_id_reused_after_deleting_highest(contractors):
    contractors.add(_contractor("A"))
    last = contractors.add(_contractor("B"))
    contractors.delete(Contractor(id=last))
    assert contractors.add(_contractor("C")) == last


def test_malformed_fields_read_as_defaults(contractors):
    contractors.path.write_text("abc\tName\n", encoding="utf-8")
    [record] = contractors.all()
    assert record == Contractor(id=0, name="Name")


def test_product_round_trip(products):
    product = Product(
        name="Mleko", ean="5900000000000", manufacturer="Firma",
        price_net=2.5, vat=23.0, price_gross=3.0,
    )
    new_id = products.add(product)
    stored = products.get(new_id)
    assert stored.id == new_id
    assert (stored.name, stored.ean, stored.manufacturer) == ("Mleko", "5900000000000", "Firma")
    assert (stored.price_net, stored.vat, stored.price_gross) == (2.5, 23.0, 3.0)


def test_product_file_field_order(products):
    products.add(Product(name="Mleko", ean="590", manufacturer="Firma",
                         price_net=2.5, vat=23.0, price_gross=3.0))
    fields = products.path.read_text(encoding="utf-8").rstrip("\n").split("\t")
    assert fields == ["1", "Mleko", "590", "Firma", "2.5", "23", "3"]


def test_product_update_and_delete(products):
    new_id = products.add(Product(name="Old", price_net=1.0))
    products.update(Product(id=new_id, name="New", price_net=4.5, vat=8.0))
    assert products.get(new_id).name == "New"
    assert products.get(new_id).price_net == 4.5
    products.delete(Product(id=new_id))
    assert products.all() == []


def test_non_numeric_price_reads_as_zero(products):
    products.path.write_text("1\tX\t0\tM\tcheap\t23\t1.5\n", encoding="utf-8")
    [record] = products.all()
    assert record.price_net == 0.0
    assert record.price_gross == 1.5


def test_invoice_round_trip(invoices):
    new_id = invoices.add(Invoice(payment="przelew", contractor_id=4))
    stored = invoices.get(new_id)
    assert stored == Invoice(id=new_id, payment="przelew", contractor_id=4)


def test_invoice_by_contractor(invoices):
    a = invoices.add(Invoice(payment="gotowka", contractor_id=1))
    invoices.add(Invoice(payment="przelew", contractor_id=2))
    c = invoices.add(Invoice(payment="karta", contractor_id=1))
    assert [inv.id for inv in invoices.by_contractor(1)] == [a, c]
    assert invoices.by_contractor(3) == []


def test_invoice_update_keeps_id(invoices):
    new_id = invoices.add(Invoice(payment="gotowka", contractor_id=1))
    invoices.update(Invoice(id=new_id, payment="karta", contractor_id=5))
    assert invoices.get(new_id) == Invoice(id=new_id, payment="karta", contractor_id=5)


def test_position_round_trip(positions):
    pos = Position(invoice_id=2, product_id=3, quantity=4, price_net=1.5, value_net=6.0)
    new_id = positions.add(pos)
    stored = positions.get(new_id)
    assert stored == Position(id=new_id, invoice_id=2, product_id=3, quantity=4,
                              price_net=1.5, value_net=6.0)


def test_position_filters(positions):
    p1 = positions.add(Position(invoice_id=1, product_id=10, quantity=1))
    p2 = positions.add(Position(invoice_id=2, product_id=10, quantity=2))
    p3 = positions.add(Position(invoice_id=1, product_id=11, quantity=3))
    assert [p.id for p in positions.for_invoice(1)] == [p1, p3]
    assert [p.id for p in positions.with_product(10)] == [p1, p2]
    assert positions.with_product(12) == []


def test_position_update_and_delete(positions):
    new_id = positions.add(Position(invoice_id=1, product_id=1, quantity=1))
    positions.update(Position(id=new_id, invoice_id=1, product_id=1, quantity=9))
    assert positions.get(new_id).quantity == 9
    positions.delete(Position(id=new_id))
    assert positions.get(new_id) == Position()


def test_position_extend_returns_ids_in_order(positions):
    ids = positions.extend([Position(invoice_id=1), Position(invoice_id=1)])
    assert ids == [p.id for p in positions.all()]