# server/creomotion/api/v1/serializers/client.py
"""
Sérialise un Client en dictionnaire JSON prêt à exposer.

Le hash du mot de passe ne sort jamais : seul `hasPortalAccess` l'indique.
"""

from __future__ import annotations
from typing import Any, Dict, TYPE_CHECKING

from creomotion.core.utils.datetime import isoformat

if TYPE_CHECKING:
    from creomotion.infrastructure.persistence.database.models.client import Client


def serialize_client_summary(c: Client) -> Dict[str, Any]:
    return {"id": str(c.id), "name": c.name, "email": c.email, "company": c.company}


def serialize_client(c: Client, *, counts: Dict[str, int] | None = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": str(c.id),
        "name": c.name,
        "email": c.email,
        "company": c.company,
        "phone": c.phone,
        "address": c.address,
        "city": c.city,
        "companyCode": c.company_code,
        "vatCode": c.vat_code,
        "hasPortalAccess": bool(c.password_hash),
        "createdAt": isoformat(c.created_at),
        "updatedAt": isoformat(c.updated_at),
    }
    if counts is not None:
        data["_count"] = counts
    return data


def serialize_client_detail(c: Client) -> Dict[str, Any]:
    """Fiche + projets + factures (GET /clients/{id})."""
    from creomotion.api.v1.serializers.project import serialize_project_summary
    from creomotion.api.v1.serializers.invoice import serialize_invoice_summary

    data = serialize_client(c)
    data["projects"] = [serialize_project_summary(p) for p in c.projects]
    data["invoices"] = [serialize_invoice_summary(i) for i in c.invoices]
    return data
