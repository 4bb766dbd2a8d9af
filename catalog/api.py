import logging

from django.db import DatabaseError
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Item, Ingredient
from .serializers import ItemSerializer, IngredientSerializer

logger = logging.getLogger(__name__)


class CatalogList(generics.ListCreateAPIView):
    """
    List entries newest first, or add one by name.

    Responses keep the shapes the bakery front end was written against:
    ``{"insertedId": ...}`` on create, ``{"error": ...}`` on failure.
    """
    pagination_class = None
    label = 'item'

    def get_queryset(self):
        return self.serializer_class.Meta.model.objects.all().order_by('-id')

    def list(self, request, *args, **kwargs):
        try:
            return super().list(request, *args, **kwargs)
        except DatabaseError as e:
            logger.error(f"Failed to fetch {self.label}s: {e}")
            return Response({"error": f"Failed to fetch {self.label}s"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def create(self, request, *args, **kwargs):
        name = str(request.data.get('name') or '').strip()
        if not name:
            return Response({"error": "Name required"}, status=status.HTTP_400_BAD_REQUEST)
        model = self.serializer_class.Meta.model
        try:
            if model.objects.filter(name=name).exists():
                logger.warning(f"Duplicate {self.label} name rejected: {name}")
                return Response({"error": "Already exists"}, status=status.HTTP_409_CONFLICT)
            serializer = self.get_serializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            instance = serializer.save()
        except DatabaseError as e:
            logger.error(f"Failed to add {self.label} {name}: {e}")
            return Response({"error": f"Failed to add {self.label}"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.info(f"Added {self.label} {instance.pk}: {instance.name}")
        return Response({"insertedId": instance.pk}, status=status.HTTP_201_CREATED)


class CatalogDetail(APIView):
    """Rename/reprice (PUT) or delete an entry by id."""
    serializer_class = ItemSerializer
    label = 'item'

    def put(self, request, id):
        name = str(request.data.get('name') or '').strip()
        if not name:
            return Response({"error": "Name required"}, status=status.HTTP_400_BAD_REQUEST)
        update_doc = {'name': name}
        if 'price' in request.data:
            update_doc['price'] = request.data.get('price')
        model = self.serializer_class.Meta.model
        try:
            instance = model.objects.filter(pk=id).first()
            if instance is None:
                return Response({"modifiedCount": 0})
            serializer = self.serializer_class(instance, data=update_doc, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
        except DatabaseError as e:
            logger.error(f"Failed to update {self.label} {id}: {e}")
            return Response({"error": f"Failed to update {self.label}"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"modifiedCount": 1})

    def delete(self, request, id):
        model = self.serializer_class.Meta.model
        try:
            _, per_model = model.objects.filter(pk=id).delete()
            deleted = per_model.get(model._meta.label, 0)
        except DatabaseError as e:
            logger.error(f"Failed to delete {self.label} {id}: {e}")
            return Response({"error": f"Failed to delete {self.label}"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"deletedCount": deleted})


class ItemList(CatalogList):
    serializer_class = ItemSerializer
    label = 'item'


class ItemDetail(CatalogDetail):
    serializer_class = ItemSerializer
    label = 'item'


class IngredientList(CatalogList):
    serializer_class = IngredientSerializer
    label = 'ingredient'


class IngredientDetail(CatalogDetail):
    serializer_class = IngredientSerializer
    label = 'ingredient'


class ManageCatalog(APIView):
    """Items and ingredients together, for the management screen."""

    def get(self, request):
        try:
            items = ItemSerializer(Item.objects.all().order_by('-id'), many=True).data
            ingredients = IngredientSerializer(Ingredient.objects.all().order_by('-id'), many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to fetch catalog: {e}")
            return Response({"error": "Failed to fetch data"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"items": items, "ingredients": ingredients})
