from django.urls import path
from .api import DailySalesSubmitAPIView, DailySalesSummaryAPIView, DueRecalculationAPIView

urlpatterns = [
    path('', DailySalesSubmitAPIView.as_view(), name='daily-sales-submit'),
    path('recalculations/', DueRecalculationAPIView.as_view(), name='due-recalculations'),
    path('<str:date>/', DailySalesSummaryAPIView.as_view(), name='daily-sales-summary'),
]
