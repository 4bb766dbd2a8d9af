from rest_framework import serializers
from catalog.models import Item
from core.fields import DateKeyField
from .models import Salesman, SalesmanOrder, HomeStock


class SalesmanSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')

    class Meta:
        model = Salesman
        fields = ['id', 'name', 'phone']

    def validate_phone(self, value):
        return value or ''


class SalesmanOrderSerializer(serializers.ModelSerializer):
    salesmanId = serializers.PrimaryKeyRelatedField(source='salesman', queryset=Salesman.objects.all())
    itemId = serializers.PrimaryKeyRelatedField(source='item', queryset=Item.objects.all())
    qty = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, default=0)
    date = DateKeyField()

    class Meta:
        model = SalesmanOrder
        fields = ['id', 'salesmanId', 'itemId', 'qty', 'date']
        validators = []  # saving an existing (salesman, item, date) updates it


class HomeStockSerializer(serializers.ModelSerializer):
    itemId = serializers.PrimaryKeyRelatedField(source='item', queryset=Item.objects.all())
    qty = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, default=0)
    date = DateKeyField()

    class Meta:
        model = HomeStock
        fields = ['id', 'itemId', 'qty', 'date']
        validators = []  # saving an existing (item, date) updates it
