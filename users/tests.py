from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from .models import UserProfile


class UserProfileTestCase(APITestCase):

    def setUp(self):
        self.payload = {
            'displayName': 'Mahi Owner',
            'photoURL': 'https://example.com/mahi.png',
            'email': 'owner@mahibakery.com',
        }

    def test_save_creates_profile_with_default_role(self):
        """
        Test that saving a new email creates a profile with the user role.
        """
        response = self.client.post(reverse('user-save'), self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data, {"message": "User saved"})
        profile = UserProfile.objects.get(email='owner@mahibakery.com')
        self.assertEqual(profile.role, 'user')
        self.assertEqual(profile.display_name, 'Mahi Owner')

    def test_save_is_an_upsert_by_email(self):
        """
        Test that saving the same email again updates the profile.
        """
        self.client.post(reverse('user-save'), self.payload, format='json')
        self.payload.update({'displayName': 'Mahi', 'role': 'admin'})
        response = self.client.post(reverse('user-save'), self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(UserProfile.objects.count(), 1)
        profile = UserProfile.objects.get()
        self.assertEqual(profile.display_name, 'Mahi')
        self.assertEqual(profile.role, 'admin')

    def test_email_is_required(self):
        """
        Test that a profile cannot be saved without an email.
        """
        del self.payload['email']
        response = self.client.post(reverse('user-save'), self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Email required"})

    def test_get_profile(self):
        """
        Test that a saved profile can be fetched by email.
        """
        self.client.post(reverse('user-save'), self.payload, format='json')
        response = self.client.get(reverse('user-detail', kwargs={'email': 'owner@mahibakery.com'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['displayName'], 'Mahi Owner')
        self.assertEqual(response.data['role'], 'user')

    def test_unknown_email_returns_empty_object(self):
        """
        Test that an unknown email returns an empty object.
        """
        response = self.client.get(reverse('user-detail', kwargs={'email': 'nobody@example.com'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {})
