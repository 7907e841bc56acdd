"""Django ORM models (persistence layer).

Tokens are stored only as SHA-256 hex digests.
"""

import uuid

from django.db import models


class PairingToken(models.Model):
    """Persistence model for single-use pairing codes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=255)
    token_hash = models.CharField(max_length=64, unique=True)
    expires_at = models.DateTimeField()
    used_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["expires_at"], name="devices_pai_expires_5b7e21_idx"),
        ]

    def __str__(self) -> str:
        return f"pairing for {self.user_id}"


class Device(models.Model):
    """Persistence model for paired companion devices."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=255)
    token_hash = models.CharField(max_length=64, unique=True)
    label = models.CharField(max_length=80, blank=True, null=True)
    user_agent = models.CharField(max_length=512, blank=True, null=True)
    created_at = models.DateTimeField()
    revoked_at = models.DateTimeField(blank=True, null=True)
    last_seen_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user_id"], name="devices_dev_user_id_c41a9e_idx"),
        ]

    def __str__(self) -> str:
        return self.label or str(self.id)
