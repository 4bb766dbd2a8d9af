import logging

from django.db import DatabaseError, transaction
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.utils import parse_date_key
from .models import Salesman, SalesmanOrder, HomeStock
from .serializers import SalesmanSerializer, SalesmanOrderSerializer, HomeStockSerializer

logger = logging.getLogger(__name__)


class SalesmanList(APIView):

    def get(self, request):
        try:
            salesmen = Salesman.objects.all().order_by('id')
            data = SalesmanSerializer(salesmen, many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to fetch salesmen: {e}")
            return Response({"error": "Failed to fetch salesmen"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data)

    def post(self, request):
        name = str(request.data.get('name') or '').strip()
        if not name:
            return Response({"error": "Name required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            if Salesman.objects.filter(name=name).exists():
                logger.warning(f"Duplicate salesman name rejected: {name}")
                return Response({"error": "Already exists"}, status=status.HTTP_409_CONFLICT)
            serializer = SalesmanSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            salesman = serializer.save()
        except DatabaseError as e:
            logger.error(f"Failed to add salesman {name}: {e}")
            return Response({"error": "Failed to add salesman"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.info(f"Added salesman {salesman.pk}: {salesman.name}")
        return Response({"insertedId": salesman.pk}, status=status.HTTP_201_CREATED)


class SalesmanDetail(APIView):

    def put(self, request, id):
        name = str(request.data.get('name') or '').strip()
        if not name:
            return Response({"error": "Name required"}, status=status.HTTP_400_BAD_REQUEST)
        # a phone left out of the update is cleared, not kept
        update_doc = {'name': name, 'phone': request.data.get('phone') or ''}
        try:
            salesman = Salesman.objects.filter(pk=id).first()
            if salesman is None:
                return Response({"modifiedCount": 0})
            serializer = SalesmanSerializer(salesman, data=update_doc)
            serializer.is_valid(raise_exception=True)
            serializer.save()
        except DatabaseError as e:
            logger.error(f"Failed to update salesman {id}: {e}")
            return Response({"error": "Failed to update salesman"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"modifiedCount": 1})

    def delete(self, request, id):
        try:
            _, per_model = Salesman.objects.filter(pk=id).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete salesman {id}: {e}")
            return Response({"error": "Failed to delete salesman"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"deletedCount": per_model.get(Salesman._meta.label, 0)})


def upsert(model, lookup, qty):
    """
    Insert or update the row identified by ``lookup``.

    Returns ``(upserted_id, modified)`` in the shape the front end expects:
    the new id when a row was created, otherwise None and whether qty changed.
    """
    with transaction.atomic():
        row = model.objects.select_for_update().filter(**lookup).first()
        if row is None:
            row = model.objects.create(qty=qty, **lookup)
            return row.pk, 0
        if row.qty == qty:
            return None, 0
        row.qty = qty
        row.save(update_fields=['qty'])
        return None, 1


class SalesmanOrderList(APIView):
    """
    GET ?date=: orders, optionally for a single day.
    POST: save the quantity for (salesmanId, itemId, date).
    """

    def get(self, request):
        orders = SalesmanOrder.objects.all()
        date = request.query_params.get('date')
        if date:
            day = parse_date_key(date)
            if day is None:
                return Response({"error": "Invalid date"}, status=status.HTTP_400_BAD_REQUEST)
            orders = orders.filter(date=day)
        try:
            data = SalesmanOrderSerializer(orders, many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to fetch orders: {e}")
            return Response({"error": "Failed to fetch orders"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data)

    def post(self, request):
        if not all(request.data.get(key) for key in ('salesmanId', 'itemId', 'date')):
            return Response({"error": "salesmanId, itemId, date required"}, status=status.HTTP_400_BAD_REQUEST)
        serializer = SalesmanOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data
        lookup = {'salesman': data['salesman'], 'item': data['item'], 'date': data['date']}
        try:
            upserted, modified = upsert(SalesmanOrder, lookup, data['qty'])
        except DatabaseError as e:
            logger.error(f"Failed to save order {lookup}: {e}")
            return Response({"error": "Failed to save order"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"upserted": upserted, "modified": modified}, status=status.HTTP_201_CREATED)


class SalesmanOrderDetail(APIView):
    """Change just the quantity of an existing order."""

    def put(self, request, id):
        if request.data.get('qty') is None:
            return Response({"error": "qty required"}, status=status.HTTP_400_BAD_REQUEST)
        serializer = SalesmanOrderSerializer(data={'qty': request.data.get('qty')}, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            modified = SalesmanOrder.objects.filter(pk=id).update(qty=serializer.validated_data['qty'])
        except DatabaseError as e:
            logger.error(f"Failed to update order {id}: {e}")
            return Response({"error": "Failed to update order"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"modifiedCount": modified})


class HomeStockList(APIView):
    """Goods kept back at the shop ("ghorer mal"), per item and day."""

    def get(self, request):
        stock = HomeStock.objects.all()
        date = request.query_params.get('date')
        if date:
            day = parse_date_key(date)
            if day is None:
                return Response({"error": "Invalid date"}, status=status.HTTP_400_BAD_REQUEST)
            stock = stock.filter(date=day)
        try:
            data = HomeStockSerializer(stock, many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to fetch ghorer mal: {e}")
            return Response({"error": "Failed to fetch ghorer mal"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data)

    def post(self, request):
        if not all(request.data.get(key) for key in ('itemId', 'date')):
            return Response({"error": "itemId, date required"}, status=status.HTTP_400_BAD_REQUEST)
        serializer = HomeStockSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data
        lookup = {'item': data['item'], 'date': data['date']}
        try:
            upserted, modified = upsert(HomeStock, lookup, data['qty'])
        except DatabaseError as e:
            logger.error(f"Failed to save ghorer mal {lookup}: {e}")
            return Response({"error": "Failed to save ghorer mal"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"upserted": upserted, "modified": modified}, status=status.HTTP_201_CREATED)


class SalesmanSummary(APIView):
    """Every salesman order and every ghorer mal entry for one day."""

    def get(self, request, date):
        day = parse_date_key(date)
        if day is None:
            return Response({"error": "Invalid date"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            orders = SalesmanOrderSerializer(SalesmanOrder.objects.filter(date=day), many=True).data
            ghorer_mal = HomeStockSerializer(HomeStock.objects.filter(date=day), many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to fetch summary for {day}: {e}")
            return Response({"error": "Failed to fetch summary"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"orders": orders, "ghorerMal": ghorer_mal})
