"""Plain-text invoicing: contractors, products, invoices and HTML invoice documents."""

__version__ = "0.1.0"