# stands/services/qris.py

"""
QRIS LOOKUP

Buyers paying by QRIS scan the stand's configured code, then upload a
payment proof. These helpers only read StandSettings; they never create it.
"""

from __future__ import annotations

from core.exceptions import NotFoundError
from stands.models import StandSettings


def _settings_for(stand_id) -> StandSettings | None:
    return StandSettings.objects.filter(stand_id=stand_id, is_active=True).first()


def qris_payload(stand_id) -> dict | None:
    """
    QRIS info for a stand, or None when the stand has no usable code.
    Used where QRIS is optional (attached to a checkout response).
    """
    settings_row = _settings_for(stand_id)
    if settings_row is None or not settings_row.has_qris:
        return None

    return {
        "stand_id": str(settings_row.stand_id),
        "qris_code": settings_row.qris,
        "store_name": settings_row.store_name,
    }


def get_qris_for_stand(stand_id) -> dict:
    payload = qris_payload(stand_id)
    if payload is None:
        raise NotFoundError("QRIS code not configured for this stand")
    return payload
