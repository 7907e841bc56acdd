"""Serializers for the pairing endpoints."""

from rest_framework import serializers


class CompletePairingSerializer(serializers.Serializer):
    pairing_code = serializers.CharField(max_length=128)
    label = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)


class PairingCodeSerializer(serializers.Serializer):
    pairing_code = serializers.CharField(source="code")
    expires_at = serializers.DateTimeField()


class IssuedDeviceSerializer(serializers.Serializer):
    device_token = serializers.CharField()
    user_id = serializers.CharField(source="user_id.value")
    device_id = serializers.UUIDField(source="device_id.value")
