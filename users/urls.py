# users/urls.py
from django.urls import path
from .api import UserProfileSaveAPIView, UserProfileDetailAPIView

urlpatterns = [
    path('', UserProfileSaveAPIView.as_view(), name='user-save'),
    path('<str:email>/', UserProfileDetailAPIView.as_view(), name='user-detail'),
]
