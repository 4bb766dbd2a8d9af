from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['email', 'display_name', 'role', 'updated_at']
    list_filter = ['role']
    search_fields = ['email', 'display_name']
