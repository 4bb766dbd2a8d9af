from django.urls import path
from .api import (
    SalesmanList,
    SalesmanDetail,
    SalesmanOrderList,
    SalesmanOrderDetail,
    HomeStockList,
    SalesmanSummary,
)

urlpatterns = [
    path('salesmen/', SalesmanList.as_view(), name='salesman-list'),
    path('salesmen/<int:id>/', SalesmanDetail.as_view(), name='salesman-detail'),
    path('salesman-orders/', SalesmanOrderList.as_view(), name='salesman-order-list'),
    path('salesman-orders/<int:id>/', SalesmanOrderDetail.as_view(), name='salesman-order-detail'),
    path('ghorer-mal/', HomeStockList.as_view(), name='ghorer-mal'),
    path('salesman-summary/<str:date>/', SalesmanSummary.as_view(), name='salesman-summary'),
]
