# stands/models.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class StandSettings(models.Model):
    """
    Vendor-side settings for one stand account.

    - exactly one row per stand_admin user
    - `qris` is the QR payment reference shown to buyers paying by QRIS;
      an empty value means QRIS is not configured for the stand
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    stand = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="stand_settings",
    )

    store_name = models.CharField(max_length=100)
    qris = models.TextField(blank=True, default="")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["store_name"]
        verbose_name_plural = "Stand settings"

    def clean(self):
        if not (self.store_name or "").strip():
            raise ValidationError({"store_name": "store_name is required"})

    @property
    def has_qris(self) -> bool:
        return bool((self.qris or "").strip())

    def __str__(self):
        return self.store_name
