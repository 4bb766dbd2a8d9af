from rest_framework import serializers
from .models import Item, Ingredient


class ItemSerializer(serializers.ModelSerializer):
    price = serializers.CharField(required=False, allow_blank=True, default='')

    class Meta:
        model = Item
        fields = ['id', 'name', 'price']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name required")
        return value


class IngredientSerializer(ItemSerializer):

    class Meta(ItemSerializer.Meta):
        model = Ingredient
