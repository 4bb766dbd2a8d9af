from django.contrib import admin
from django.http import HttpResponse
from django.urls import path, include


def home(request):
    return HttpResponse("স্বাগতম! মাহি বেকারির সার্ভার চলছে 🚀")


urlpatterns = [
    path('', home, name='home'),
    path('admin/', admin.site.urls),
    path('api/', include('catalog.urls')),
    path('api/usage/', include('usage.urls')),
    path('api/users/', include('users.urls')),
    path('api/', include('salesmen.urls')),
    path('api/daily-sales/', include('sales.urls')),
]
