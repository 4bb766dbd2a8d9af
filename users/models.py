# users/models.py

from django.db import models


class UserProfile(models.Model):
    """
    Profile of a front-end user. Sign-in happens in the front end's identity
    provider; the back office only remembers who they are and their role.
    """
    email = models.EmailField(unique=True)
    display_name = models.CharField(max_length=150, blank=True, default='')
    photo_url = models.URLField(max_length=500, blank=True, default='')
    role = models.CharField(max_length=20, default='user')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'user profile'
        verbose_name_plural = 'user profiles'

    def __str__(self):
        return self.email
