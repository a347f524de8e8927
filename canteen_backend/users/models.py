"""
PATH: users/models.py

CUSTOM USER MODEL

Canteen identities:
- student     : browses, fills a cart, checks out, pays by card/cash/QRIS
- stand_admin : a vendor ("stand") that owns products and fulfils orders
- admin       : tops up balances and manages catalog data

Money rule:
- `balance` is only ever mutated by ledger.services.ledger_service, which
  writes the matching immutable Transaction row in the same DB transaction.
- balance can never go below zero (DB check constraint).
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email=None, password=None, **extra_fields):
        """
        Rules:
        - email is the login identity and is required.
        - name defaults to the email local-part.
        """
        email = (email or "").strip()
        if not email:
            raise ValueError("An email address is required")

        email = self.normalize_email(email)
        extra_fields.setdefault("name", email.split("@")[0])
        extra_fields.setdefault("is_active", True)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", User.ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    ROLE_STUDENT = "student"
    ROLE_ADMIN = "admin"
    ROLE_STAND_ADMIN = "stand_admin"

    ROLE_CHOICES = [
        (ROLE_STUDENT, "Student"),
        (ROLE_ADMIN, "Admin"),
        (ROLE_STAND_ADMIN, "Stand Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=100)

    student_id = models.CharField(max_length=50, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    class_name = models.CharField(max_length=50, blank=True, default="")
    rfid_card = models.CharField(max_length=50, blank=True, default="")

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_STUDENT)

    balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Ledger-backed balance. Mutated only via the ledger service.",
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name="user_balance_non_negative",
            )
        ]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()
        if not self.email:
            raise ValidationError("User must have an email")
        if self.balance is not None and Decimal(self.balance) < 0:
            raise ValidationError({"balance": "balance cannot be negative"})

    @property
    def is_stand(self) -> bool:
        return self.role == self.ROLE_STAND_ADMIN

    def __str__(self):
        return f"{self.name or self.email} ({self.role})"
