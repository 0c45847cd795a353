from fastapi import HTTPException
from typing import Optional, Dict, Any

from txvault.domain.envelope.errors import EnvelopeError


def raise_vault_error(
    code: str,
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """Raise a standardized vault HTTPException.

    Args:
        code: Error code (INVALID_REQUEST, NOT_FOUND, DECRYPT_FAILED, etc.)
        status_code: HTTP Status Code (400, 404, 500, etc.)
        message: Human readable message
        details: Optional extra details
    """
    error_body: Dict[str, Any] = {
        "code": code,
        "message": message
    }
    if details:
        error_body["details"] = details

    raise HTTPException(status_code=status_code, detail={"error": error_body})


def raise_envelope_error(exc: EnvelopeError) -> None:
    """Map an envelope engine failure onto its transport status."""
    raise_vault_error(exc.code, exc.http_status, exc.message, exc.details())
