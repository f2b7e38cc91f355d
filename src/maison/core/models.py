"""Core models for Maison Aurèle."""

import uuid

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class Locale(models.TextChoices):
    """Storefront locales. French is the house language."""

    FR = "fr", "Français"
    EN = "en", "English"


class UserRole(models.TextChoices):
    CUSTOMER = "CUSTOMER", "Customer"
    ADMIN = "ADMIN", "Administrator"
    EDITOR = "EDITOR", "Editor"
    MERCHANDISER = "MERCHANDISER", "Merchandiser"


class UserManager(BaseUserManager):
    """Custom user manager using email as the unique identifier."""

    def normalize_email(self, email):
        return super().normalize_email(email).strip().lower()

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular user with the given email and password."""
        if not email:
            raise ValueError("Users must have an email address")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a superuser with the given email and password."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", UserRole.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Custom user model using email as the username."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    username = None  # Remove username field

    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.CUSTOMER)
    locale = models.CharField(max_length=2, choices=Locale.choices, default=Locale.FR)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"

    def __str__(self):
        return self.email

    @property
    def is_backoffice_user(self):
        return self.role in (UserRole.ADMIN, UserRole.EDITOR, UserRole.MERCHANDISER)

    def get_display_name(self):
        """Get display name for the user."""
        if self.first_name or self.last_name:
            return f"{self.first_name} {self.last_name}".strip()
        return self.email.split("@")[0]


class TimeStampedModel(models.Model):
    """Abstract base with creation and update timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class PublicationStatus(models.TextChoices):
    """Lifecycle shared by products, collections and editorial posts."""

    DRAFT = "DRAFT", "Draft"
    ACTIVE = "ACTIVE", "Active"
    ARCHIVED = "ARCHIVED", "Archived"
