from rest_framework import serializers
from .utils import parse_date_key


class DateKeyField(serializers.CharField):
    """Accepts any date the front end sends; stores and renders YYYY-MM-DD."""

    def to_internal_value(self, data):
        parsed = parse_date_key(super().to_internal_value(data))
        if parsed is None:
            raise serializers.ValidationError("Invalid date.")
        return parsed

    def to_representation(self, value):
        return value.isoformat()
