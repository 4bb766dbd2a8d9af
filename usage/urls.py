from django.urls import path
from .api import UsageList, UsageByDate

urlpatterns = [
    path('', UsageList.as_view(), name='usage-list'),
    path('<str:date>/', UsageByDate.as_view(), name='usage-by-date'),
]
