# invoicegen

A small invoicing tool. It keeps contractors, products, invoices and invoice
positions in plain tab-separated text files, enforces a few bookkeeping rules
on them, and fills an HTML template with the data of one invoice.

It has no third-party dependencies.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package adds an `invoicegen` command:

```
invoicegen --help
```

Every command works on one database directory, chosen with `--db`
(default: `Database` in the current directory). The commands are:

| command              | what it does                                                   |
|----------------------|----------------------------------------------------------------|
| `contractors`        | list contractors                                               |
| `products`           | list products                                                  |
| `invoices`           | list invoices with their contractor's details                  |
| `add-contractor`     | add a contractor (`--name`, `--surname`, `--address`, `--nip`) |
| `add-product`        | add a product (`--name`, `--ean`, `--manufacturer`, `--price-net`, `--vat`) |
| `delete-contractor ID` | delete a contractor that no invoice refers to                |
| `delete-product ID`  | delete a product that no invoice position refers to            |
| `new-invoice`        | issue an invoice (`--payment`, `--contractor`, `--line`)       |
| `show-invoice ID`    | show one invoice's payment, contractor and positions           |
| `export-invoice ID`  | render an invoice into HTML (`--template`, `--output`, both required) |

Lists are printed as tab-separated lines under a header line. `add-product`
takes the VAT rate as a whole number and works out the gross price as
`price_net * (100 + vat) / 100`.

`new-invoice` takes `--line PRODUCT_ID[:QUANTITY]` once per product; the
quantity defaults to 1, and a product may appear only once. Without
`--contractor` the invoice goes to the first stored contractor.

```
invoicegen --db data add-contractor --name Jan --surname Kowalski --address "Main St 1" --nip 1234567890
invoicegen --db data add-product --name Widget --ean 5900000000000 --price-net 10 --vat 23
invoicegen --db data new-invoice --payment transfer --contractor 1 --line 1:3
invoicegen --db data export-invoice 1 --template template.html --output invoice-1.html
```

Messages are printed in Polish. The command exits with 0 on success and 1
when a command fails, for example when deleting a contractor that is used on
an invoice or when an invoice id does not exist.

## Storage

Each kind of record has its own file in the database directory, one record
per line, fields separated by tabs, the numeric id first:

| file                   | fields                                                    |
|------------------------|-----------------------------------------------------------|
| `contractors.txt`      | id, name, surname, address, NIP                           |
| `products.txt`         | id, name, EAN, manufacturer, net price, VAT, gross price  |
| `Invoices.txt`         | id, payment, contractor id                                |
| `InvoicePositions.txt` | id, invoice id, product id, quantity, net price, net value |

A new record gets an id one greater than the highest id already in its file,
so the first record gets id 1; a missing file is created on the first add and
reads as empty. Updating or removing a record rewrites the file without
changing the order of the other lines. Decimal numbers are written with
`invoicegen.models.format_number`: integers in full, other numbers in the
general format with six significant digits (`100.0` becomes `"100"`).

`invoicegen.storage.RecordFile` does the file work. Removing or modifying an
id that is not in the file raises `RecordNotFoundError`; a file that cannot be
opened or written raises `StorageError`. `read_html_template` returns the
contents of every `<div name="...">` section of an HTML file.

The stores are reached through `invoicegen.repository.Database`:

```python
from invoicegen.repository import Database

db = Database("data")
contractors = db.contractors()   # ContractorStore
products = db.products()         # ProductStore
invoices = db.invoices()         # InvoiceStore
positions = db.positions()       # PositionStore
```

Each store has `all`, `get`, `add` (returns the new id), `delete` and
`update`. `get` returns a blank record with id 0 when the id is not stored.
`InvoiceStore.by_contractor` and `PositionStore.for_invoice` /
`PositionStore.with_product` filter by reference.

The records themselves are the dataclasses `Contractor`, `Product`,
`Position` and `Invoice` in `invoicegen.models`.

## Services

`invoicegen.services` adds the business rules:

- `ContractorService.delete` refuses a contractor that appears on any invoice
  and raises `ContractorInUseError`.
- `ProductService.delete` refuses a product that appears on any invoice
  position and raises `ProductInUseError`.
- `InvoiceService.get` and `InvoiceService.all` return invoices together with
  their contractor header and their positions. `InvoiceService.add` stores the
  invoice, then each of its positions under the new invoice id, and returns
  that id. `InvoiceService.update` rewrites the invoice and each of its
  positions. `InvoiceService.delete` removes the invoice record only; its
  positions stay in their file.

```python
from invoicegen.repository import Database
from invoicegen.services import ContractorService, InvoiceService, ProductService

db = Database("data")
contractor_service = ContractorService(db)
product_service = ProductService(db)
invoice_service = InvoiceService(db)

for invoice in invoice_service.all():
    print(invoice.id, invoice.header.name, len(invoice.positions))
```

## Writing a new invoice

`invoicegen.draft.InvoiceDraft` builds a new invoice one line at a time. It
starts with the first stored contractor selected. Each product may appear
once (`add_product` raises `ValueError` otherwise, and `LookupError` for an
unknown product); a new line has a quantity of 1. Each line is a `DraftLine`
whose `value_net` is the net unit price times the quantity.

```python
from invoicegen.draft import InvoiceDraft

draft = InvoiceDraft(contractor_service, product_service, invoice_service)
draft.select_contractor(1)
print(draft.available_products())   # products not yet on the draft
draft.add_product(3)
draft.set_quantity(0, 5)
for line in draft.lines():
    print(line.name, line.quantity, line.value_net)
invoice_id = draft.submit("transfer")   # stores the invoice and clears the lines
```

Positions store whole quantities; a fractional quantity is stored as 0, while
the net value keeps the exact product.

## Tables

`invoicegen.tables` lays out stored data as `Table` objects (headers and rows
of text cells): `contractor_table`, `product_table`, `invoice_table`,
`invoice_position_table` and `contractor_card`. `Table.column(header)`
returns one column. `update_invoice` stores an edited payment, contractor and
set of position rows for an invoice, recomputing each net value from the
quantity and net price cells.

## Invoice documents

`invoicegen.document.InvoiceDocument` fills an HTML template with the data of
one invoice. The template holds named sections written as
`<div name="...">...</div>`:

| section            | placeholders                               |
|--------------------|--------------------------------------------|
| `invoiceNumber`    | `%nrInvoice%`                              |
| `contractor`       | `%Imie%`, `%Nazwisko%`, `%Adres%`, `%NIP%` |
| `positionsHeaders` | `%content%` (the rendered position rows)   |
| `footeSum`         | `%razemNet%`, `%razemBrut%`                |

Each position row holds its number, the product name and EAN, the quantity,
the unit net price, the net value, the VAT rate and the gross value, which is
the net value times `(100 + VAT) / 100`. The footer holds the net and gross
sums. `position_rows`, `net_total` and `gross_total` give these on their own;
`render` joins the filled sections; `export` reads a template file and writes
the HTML to a file.

```python
from invoicegen.document import InvoiceDocument

document = InvoiceDocument(invoice_service.get(1), product_service)
document.export("template.html", "invoice-1.html")
```

`insert_values(html, values)` replaces every `%name%` in a string with its
value, taking the names in sorted order.

## What it does not do

- It writes invoices as HTML only; it does not produce PDF files or print.
- It has no graphical interface; everything is done through the command line
  or the Python API.
- The command line has no commands for editing existing contractors,
  products or invoices; use the `update` methods of the services or
  `invoicegen.tables.update_invoice` for that.