"""Serializers translating HTTP bodies to dispatcher payloads and back."""

from django.http import QueryDict
from rest_framework import serializers


class DispatchRequestSerializer(serializers.Serializer):
    """Loose structural check of a ticket request body.

    Field-level rules live in the dispatcher; this only shapes the body. The
    ticket form may arrive as a URL-encoded ``formdata`` string instead of a
    ``ticket_fields`` object.
    """

    event_id = serializers.CharField(required=False, allow_blank=True)
    ticket_id = serializers.CharField(required=False, allow_blank=True)
    order_id = serializers.CharField(required=False, allow_blank=True)
    provider_key = serializers.CharField(required=False, allow_blank=True)
    token = serializers.CharField(required=False, allow_blank=True)
    ticket_fields = serializers.DictField(required=False)
    formdata = serializers.CharField(required=False, allow_blank=True)

    def to_payload(self) -> dict:
        data = dict(self.validated_data)
        formdata = data.pop("formdata", None)
        if formdata is not None and "ticket_fields" not in data:
            data["ticket_fields"] = QueryDict(formdata).dict()
        return data


class TokenSerializer(serializers.Serializer):
    """Serializer for an issued request token."""

    action = serializers.CharField()
    token = serializers.CharField()
