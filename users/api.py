import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import UserProfile
from .serializers import UserProfileSerializer

logger = logging.getLogger(__name__)


class UserProfileSaveAPIView(APIView):
    """Create or update a profile, keyed by email."""

    def post(self, request):
        if not request.data.get('email'):
            return Response({"error": "Email required"}, status=status.HTTP_400_BAD_REQUEST)
        serializer = UserProfileSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data
        try:
            profile, created = UserProfile.objects.update_or_create(
                email=data['email'],
                defaults={
                    'display_name': data.get('display_name', ''),
                    'photo_url': data.get('photo_url', ''),
                    'role': data.get('role', 'user'),
                },
            )
        except DatabaseError as e:
            logger.error(f"Failed to save user {data['email']}: {e}")
            return Response({"error": "Failed to save user"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.info(f"{'Created' if created else 'Updated'} user profile {profile.email}")
        return Response({"message": "User saved"}, status=status.HTTP_201_CREATED)


class UserProfileDetailAPIView(APIView):
    """Profile by email; an empty object when the email is unknown."""

    def get(self, request, email):
        try:
            profile = UserProfile.objects.filter(email=email).first()
        except DatabaseError as e:
            logger.error(f"Failed to fetch user {email}: {e}")
            return Response({"error": "Failed to fetch user"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        if profile is None:
            return Response({})
        return Response(UserProfileSerializer(profile).data)
