from rest_framework import serializers
from .models import UserProfile


class UserProfileSerializer(serializers.ModelSerializer):
    displayName = serializers.CharField(source='display_name', required=False, allow_blank=True, allow_null=True, default='')
    photoURL = serializers.CharField(source='photo_url', required=False, allow_blank=True, allow_null=True, default='')
    role = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='user')

    class Meta:
        model = UserProfile
        fields = ['id', 'email', 'displayName', 'photoURL', 'role']
        extra_kwargs = {
            # upsert by email, so an existing address is not a validation error
            'email': {'validators': []},
        }

    def validate_displayName(self, value):
        return value or ''

    def validate_photoURL(self, value):
        return value or ''

    def validate_role(self, value):
        return value or 'user'
