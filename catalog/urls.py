from django.urls import path
from .api import ItemList, ItemDetail, IngredientList, IngredientDetail, ManageCatalog

urlpatterns = [
    path('items/', ItemList.as_view(), name='item-list'),
    path('items/<int:id>/', ItemDetail.as_view(), name='item-detail'),
    path('ingredients/', IngredientList.as_view(), name='ingredient-list'),
    path('ingredients/<int:id>/', IngredientDetail.as_view(), name='ingredient-detail'),
    path('manage/', ManageCatalog.as_view(), name='manage-catalog'),
]
