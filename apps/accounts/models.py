# Models:
# 1. User - Custom user model (email login, owns every CRM row)
# 2. UserProfile - Settings shown on the profile page


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.formatting import get_initials


TIMEZONE_CHOICES = [
    ('UTC', 'UTC'),
    ('America/New_York', 'America/New_York'),
    ('America/Chicago', 'America/Chicago'),
    ('America/Denver', 'America/Denver'),
    ('America/Los_Angeles', 'America/Los_Angeles'),
    ('Europe/London', 'Europe/London'),
    ('Europe/Paris', 'Europe/Paris'),
    ('Europe/Berlin', 'Europe/Berlin'),
    ('Asia/Tokyo', 'Asia/Tokyo'),
    ('Asia/Shanghai', 'Asia/Shanghai'),
    ('Australia/Sydney', 'Australia/Sydney'),
]


# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users
    - Create superusers (admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password
            **extra_fields: Additional fields (full_name, etc.)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided

        Example:
            user = User.objects.create_user(
                email='jane@example.com',
                password='securepass123',
                full_name='Jane Doe',
            )
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email).lower()

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser (admin panel access)
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)



# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for Pipeline CRM

    Features:
    - Email-based authentication (no username)
    - Tenant boundary: every contact, company, deal, stage, activity
      and note carries an owner FK to this model
    """

    email = models.EmailField(_('email address'), unique=True, max_length=255, db_index=True, help_text=_('Required. Used for login.'))
    full_name = models.CharField(_('full name'), max_length=150, blank=True, help_text=_('Name shown in the header and on records'))

    is_active = models.BooleanField(_('active'), default=True, help_text=_('Designates whether this user should be treated as active. Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['full_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']

    def __str__(self):
        if self.full_name:
            return f"{self.full_name} ({self.email})"
        return self.email

    # HELPER METHODS
    def get_full_name(self):
        return self.full_name or self.email

    def get_short_name(self):
        if self.full_name:
            return self.full_name.split()[0]
        return self.email

    def get_initials(self):
        """'Jane Doe' -> 'JD'; falls back to the first letter of the email"""
        return get_initials(self.full_name) or self.email[:1].upper()



# USER PROFILE MODEL (Extended Information)

class UserProfile(models.Model):
    """
    Profile settings for a user

    Automatically created when User is created (via signals)

    Fields:
    - job_title: shown on the settings page
    - timezone: used to render due dates
    - avatar_url: external picture URL
    """

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile', verbose_name=_('user'))
    job_title = models.CharField(_('job title'), max_length=100, blank=True, help_text=_('e.g., Account Executive'))
    timezone = models.CharField(_('timezone'), max_length=50, choices=TIMEZONE_CHOICES, default='UTC')
    avatar_url = models.URLField(_('avatar URL'), max_length=500, blank=True)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        verbose_name = _('user profile')
        verbose_name_plural = _('user profiles')

    def __str__(self):
        return f"Profile for: {self.user.get_full_name()}"
