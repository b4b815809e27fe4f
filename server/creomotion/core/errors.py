from __future__ import annotations
"""server/creomotion/core/errors.py
~~~~~~~~~~~~~~~~~~~~~~~~
Taxonomie d'erreurs applicatives.

Chaque erreur porte son code HTTP et un message lisible. Les handlers
installés par `core.middleware` les convertissent en `{"error": message}` :
aucune trace ni identifiant interne ne sort vers le client.
"""


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Entrée manquante ou mal formée."""
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(AppError):
    """Session absente, invalide ou expirée ; identifiants refusés."""
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(AppError):
    """Session valide mais rôle ou propriété insuffisants."""
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class DependencyError(AppError):
    """Suppression bloquée par des lignes enfants."""
    status_code = 400
    default_message = "Resource has dependent records"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"
