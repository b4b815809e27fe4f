# server/tests/unit/test_invoice_numbering.py
import pytest

from creomotion.application.services.invoice_service import (
    allocate_number,
    format_number,
    line_item_rows,
)
from creomotion.infrastructure.persistence.database.models import Invoice
from creomotion.infrastructure.persistence.repositories.invoice_repository import InvoiceRepository

pytestmark = pytest.mark.unit


def _invoice(db, project, number):
    db.add(Invoice(invoice_number=number, project_id=project.id, client_id=project.client_id, amount=10))
    db.flush()


def test_format_number():
    assert format_number("CM", 1) == "CM-0001"
    assert format_number("CM", 12345) == "CM-12345"


def test_first_number_creates_default_settings(db):
    repo = InvoiceRepository(db)
    assert allocate_number(repo) == "CM-0001"
    assert allocate_number(repo) == "CM-0002"
    assert repo.get_settings().next_invoice_number == 3


def test_number_skips_past_existing_invoices(db, make_client, make_project):
    project = make_project(make_client().id)
    _invoice(db, project, "CM-0007")
    _invoice(db, project, "CM-manual")
    _invoice(db, project, "XX-0099")
    repo = InvoiceRepository(db)
    assert repo.highest_number("CM") == 7
    assert allocate_number(repo) == "CM-0008"


def test_counter_ahead_of_invoices_wins(db):
    repo = InvoiceRepository(db)
    repo.update_settings(repo.get_settings(), invoice_prefix="INV", next_invoice_number=42)
    assert allocate_number(repo) == "INV-0042"


def test_line_item_total_defaults_to_quantity_times_price():
    rows = line_item_rows([
        {"description": "Edit", "quantity": 2, "unit_price": 150.0},
        {"description": "Fee", "quantity": 1, "unit_price": 10.0, "total": 12.5},
    ])
    assert rows[0]["total"] == 300.0
    assert rows[1]["total"] == 12.5
