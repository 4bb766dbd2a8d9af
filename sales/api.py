"""
sales/api.py

Endpoints for submitting a day's sales, reading a day's due summary, and
watching or requesting due recalculations.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.utils import parse_date_key
from salesmen.models import Salesman
from .ledger import DueLedger
from .models import DueRecalculation, RecalculationStatus
from .serializers import (
    DailySaleSubmissionSerializer,
    DueRecalculationSerializer,
    RecalculationRequestSerializer,
)
from .services import SaleAmountError, daily_summary, request_recalculation, submit_daily_sales
from .store import DailySaleStore, StoreError

logger = logging.getLogger(__name__)


class LedgerAPIView(APIView):
    """Builds the store and ledger the request works through."""
    store_class = DailySaleStore

    def get_ledger(self):
        return DueLedger(self.store_class())


class DailySalesSubmitAPIView(LedgerAPIView):
    """
    POST {date, entries: [{salesmanId, categories: [{name, total}], deposit}]}

    Replaces the day's records, then recalculates later dues for every
    salesman in the batch. The response lists those recalculations; one that
    failed is reported in its status and does not fail the submission.
    """

    def post(self, request):
        serializer = DailySaleSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        day = serializer.validated_data['date']
        entries = serializer.validated_data['entries']
        try:
            result = submit_daily_sales(day, entries, ledger=self.get_ledger())
        except SaleAmountError as e:
            logger.warning(f"Rejected daily sales for {day}: {e}")
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (StoreError, DatabaseError) as e:
            logger.error(f"Failed to save daily sales for {day}: {e}")
            return Response({"error": "Failed to save daily sales"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({
            "date": day.isoformat(),
            "insertedCount": result.inserted,
            "recalculations": DueRecalculationSerializer(result.recalculations, many=True).data,
        }, status=status.HTTP_201_CREATED)


class DailySalesSummaryAPIView(LedgerAPIView):
    """GET one due line per salesman for the date."""

    def get(self, request, date):
        day = parse_date_key(date)
        if day is None:
            return Response({"error": "Invalid date"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            salesmen = list(Salesman.objects.all().order_by('id'))
            data = daily_summary(day, salesmen, ledger=self.get_ledger())
        except (StoreError, DatabaseError) as e:
            logger.error(f"Failed to fetch daily sales for {day}: {e}")
            return Response({"error": "Failed to fetch daily sales"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data)


class DueRecalculationAPIView(LedgerAPIView):
    """
    GET ?status=: queued and finished recalculations, newest first.
    POST {salesmanId, date}: re-run the recalculation after that date now.
    """

    def get(self, request):
        tasks = DueRecalculation.objects.all()
        wanted = request.query_params.get('status')
        if wanted:
            if wanted not in RecalculationStatus.values:
                return Response({"error": "Unknown status"}, status=status.HTTP_400_BAD_REQUEST)
            tasks = tasks.filter(status=wanted)
        try:
            data = DueRecalculationSerializer(tasks, many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to fetch recalculations: {e}")
            return Response({"error": "Failed to fetch recalculations"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data)

    def post(self, request):
        serializer = RecalculationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        salesman = serializer.validated_data['salesman']
        day = serializer.validated_data['date']
        try:
            task = request_recalculation(salesman, day, ledger=self.get_ledger())
        except DatabaseError as e:
            logger.error(f"Failed to queue recalculation for salesman {salesman.pk} after {day}: {e}")
            return Response({"error": "Failed to queue recalculation"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(DueRecalculationSerializer(task).data, status=status.HTTP_201_CREATED)
