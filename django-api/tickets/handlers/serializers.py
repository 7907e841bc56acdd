"""Serializers for request input and for turning domain models into API responses.

Input serializers check shape only; domain rules (message length, name
length) stay in the domain so their errors keep the domain taxonomy.
"""

from rest_framework import serializers


class CreateClientSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)


class CreateTicketSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    message = serializers.CharField(allow_blank=True, trim_whitespace=False)
    price_cents = serializers.IntegerField(min_value=0)
    asset_url = serializers.URLField(max_length=500, required=False, allow_null=True, allow_blank=True)


class ClientSerializer(serializers.Serializer):
    """Serializer for Client domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    created_at = serializers.DateTimeField()


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model, for its owner."""

    id = serializers.UUIDField(source="id.value")
    public_id = serializers.CharField(source="public_id.value")
    client_id = serializers.UUIDField(source="client_id.value")
    message = serializers.CharField()
    price_cents = serializers.IntegerField(source="price_cents.value")
    status = serializers.CharField()
    asset_url = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class PublicTicketSerializer(serializers.Serializer):
    """Serializer for the public portal. Never exposes internal or owner ids."""

    public_id = serializers.CharField(source="public_id.value")
    message = serializers.CharField()
    price_cents = serializers.IntegerField(source="price_cents.value")
    status = serializers.CharField()
    asset_url = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()


class DashboardTicketSerializer(serializers.Serializer):
    """Serializer for DashboardTicket projections."""

    id = serializers.UUIDField(source="id.value")
    public_id = serializers.CharField(source="public_id.value")
    status = serializers.CharField()
    message = serializers.CharField()
    price_cents = serializers.IntegerField(source="price_cents.value")
    asset_url = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    client = serializers.SerializerMethodField()

    def get_client(self, obj) -> dict[str, str]:
        return {"id": str(obj.client_id), "name": obj.client_name}
