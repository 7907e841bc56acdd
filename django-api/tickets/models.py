"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
Timestamps are stamped by the domain, not by the database.
"""

from django.db import models


class Client(models.Model):
    """Persistence model for a freelancer's client."""

    id = models.UUIDField(primary_key=True, editable=False)
    user_id = models.CharField(max_length=255)
    name = models.CharField(max_length=80)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user_id", "-created_at"], name="tickets_cli_user_id_8f1c2a_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Ticket(models.Model):
    """Persistence model for change-request tickets."""

    class Status(models.TextChoices):
        PENDING = "pending"
        APPROVED = "approved"
        PAID = "paid"
        REJECTED = "rejected"

    id = models.UUIDField(primary_key=True, editable=False)
    public_id = models.CharField(max_length=128, unique=True)
    user_id = models.CharField(max_length=255)
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name="tickets")
    message = models.TextField()
    price_cents = models.PositiveIntegerField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    asset_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user_id", "-created_at"], name="tickets_tic_user_id_3d9e4b_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.client.name} - {self.status}"
