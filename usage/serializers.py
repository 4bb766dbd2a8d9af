from rest_framework import serializers
from core.utils import parse_date_key
from .models import DailyUsage


class DailyUsageSerializer(serializers.ModelSerializer):
    date = serializers.CharField()
    items = serializers.ListField(required=False, default=list)
    prices = serializers.ListField(required=False, default=list)
    retails = serializers.ListField(required=False, default=list)
    pieces = serializers.ListField(required=False, default=list)
    totalExpense = serializers.CharField(source='total_expense', required=False, allow_blank=True, default='0')

    class Meta:
        model = DailyUsage
        fields = ['id', 'date', 'items', 'prices', 'retails', 'pieces', 'totalExpense']

    def validate_date(self, value):
        parsed = parse_date_key(value)
        if parsed is None:
            raise serializers.ValidationError("Invalid date.")
        return parsed
