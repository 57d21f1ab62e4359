"""User DRF serializer (output only; input goes through ``dtos.py``)."""

from __future__ import annotations

from rest_framework import serializers

from modules.users.models import User


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "created_at", "updated_at"]
        read_only_fields = fields
