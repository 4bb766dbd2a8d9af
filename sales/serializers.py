from rest_framework import serializers
from core.fields import DateKeyField
from salesmen.models import Salesman
from .models import DueRecalculation


class DailySaleEntrySerializer(serializers.Serializer):
    """
    One salesman's line in a day's submission. Amounts are taken loosely:
    a missing or non-numeric total or deposit counts as 0 rather than
    rejecting the whole day.
    """
    salesmanId = serializers.PrimaryKeyRelatedField(source='salesman', queryset=Salesman.objects.all())
    categories = serializers.ListField(child=serializers.DictField(), required=False, default=list)
    deposit = serializers.JSONField(required=False, default=0)


class DailySaleSubmissionSerializer(serializers.Serializer):
    date = DateKeyField()
    entries = DailySaleEntrySerializer(many=True)


class RecalculationRequestSerializer(serializers.Serializer):
    salesmanId = serializers.PrimaryKeyRelatedField(source='salesman', queryset=Salesman.objects.all())
    date = DateKeyField()


class DueRecalculationSerializer(serializers.ModelSerializer):
    salesmanId = serializers.IntegerField(source='salesman_id', read_only=True)
    anchorDate = serializers.DateField(source='anchor_date', read_only=True)
    recordsUpdated = serializers.IntegerField(source='records_updated', read_only=True)
    recordsTotal = serializers.IntegerField(source='records_total', read_only=True)
    errorMessage = serializers.CharField(source='error_message', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    finishedAt = serializers.DateTimeField(source='finished_at', read_only=True)

    class Meta:
        model = DueRecalculation
        fields = [
            'id', 'salesmanId', 'anchorDate', 'status', 'seed', 'recordsUpdated',
            'recordsTotal', 'attempts', 'errorMessage', 'createdAt', 'finishedAt',
        ]
        read_only_fields = fields
