# server/creomotion/api/v1/serializers/invoice.py
"""
Sérialise une Invoice (lignes, client, projet) et les paramètres de facturation.
"""

from __future__ import annotations
from typing import Any, Dict, TYPE_CHECKING

from creomotion.api.v1.serializers.client import serialize_client_summary
from creomotion.core.utils.datetime import isoformat

if TYPE_CHECKING:
    from creomotion.infrastructure.persistence.database.models.invoice import (
        Invoice,
        InvoiceLineItem,
        InvoiceSettings,
    )


def serialize_line_item(li: InvoiceLineItem) -> Dict[str, Any]:
    return {
        "id": str(li.id),
        "description": li.description,
        "quantity": li.quantity,
        "unitPrice": li.unit_price,
        "total": li.total,
    }


def serialize_invoice_summary(i: Invoice) -> Dict[str, Any]:
    return {
        "id": str(i.id),
        "invoiceNumber": i.invoice_number,
        "amount": i.amount,
        "status": i.status,
        "invoiceDate": isoformat(i.invoice_date),
        "dueDate": isoformat(i.due_date),
    }


def serialize_invoice(i: Invoice) -> Dict[str, Any]:
    data = serialize_invoice_summary(i)
    data.update({
        "projectId": str(i.project_id),
        "clientId": str(i.client_id),
        "createdAt": isoformat(i.created_at),
        "updatedAt": isoformat(i.updated_at),
        "client": serialize_client_summary(i.client) if i.client is not None else None,
        "project": {"id": str(i.project.id), "name": i.project.name} if i.project is not None else None,
        "lineItems": [serialize_line_item(li) for li in i.line_items],
    })
    return data


def serialize_invoice_settings(s: InvoiceSettings) -> Dict[str, Any]:
    return {
        "id": str(s.id),
        "companyName": s.company_name,
        "companyAddress": s.company_address,
        "companyCity": s.company_city,
        "companyCountry": s.company_country,
        "companyCode": s.company_code,
        "vatNumber": s.vat_number,
        "isVatPayer": s.is_vat_payer,
        "vatRate": s.vat_rate,
        "email": s.email,
        "phone": s.phone,
        "website": s.website,
        "bankName": s.bank_name,
        "bankIban": s.bank_iban,
        "bankSwift": s.bank_swift,
        "invoicePrefix": s.invoice_prefix,
        "nextInvoiceNumber": s.next_invoice_number,
        "defaultLanguage": s.default_language,
        "defaultDueDays": s.default_due_days,
        "defaultNotes": s.default_notes,
    }
