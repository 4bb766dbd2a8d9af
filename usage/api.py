import logging

from django.db import DatabaseError, transaction
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.utils import parse_date_key
from .models import DailyUsage
from .serializers import DailyUsageSerializer

logger = logging.getLogger(__name__)

EMPTY_USAGE = {
    'items': [],
    'prices': [],
    'retails': [],
    'pieces': [],
    'totalExpense': '0',
}


class UsageList(APIView):
    """
    GET: every saved day, newest first.
    POST: save a day's usage, replacing whatever was saved for that date.
    """

    def get(self, request):
        usage_filter = request.query_params.get('filter', 'day')
        if usage_filter != 'day':
            return Response({"error": "Unsupported filter"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            usages = DailyUsage.objects.all().order_by('-id')
            data = DailyUsageSerializer(usages, many=True).data
        except DatabaseError as e:
            logger.error(f"Failed to fetch usages: {e}")
            return Response({"error": "Failed to fetch usages"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data)

    def post(self, request):
        serializer = DailyUsageSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        day = serializer.validated_data['date']
        try:
            with transaction.atomic():
                replaced, _ = DailyUsage.objects.filter(date=day).delete()
                usage = serializer.save()
        except DatabaseError as e:
            logger.error(f"Failed to insert usage for {day}: {e}")
            return Response({"error": "Failed to insert data"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if replaced:
            logger.info(f"Replaced usage for {day}")
        return Response({"insertedId": usage.pk}, status=status.HTTP_201_CREATED)


class UsageByDate(APIView):
    """One day's usage; an empty shape rather than 404 when nothing was saved."""

    def get(self, request, date):
        day = parse_date_key(date)
        if day is None:
            return Response({"error": "Invalid date"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            usage = DailyUsage.objects.filter(date=day).first()
        except DatabaseError as e:
            logger.error(f"Failed to fetch usage for {day}: {e}")
            return Response({"error": "Failed to fetch data"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if usage is None:
            return Response(dict(EMPTY_USAGE))
        data = DailyUsageSerializer(usage).data
        return Response({key: data[key] for key in EMPTY_USAGE})
