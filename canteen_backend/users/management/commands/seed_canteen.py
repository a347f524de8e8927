# users/management/commands/seed_canteen.py

from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from stands.models import StandSettings


@dataclass(frozen=True)
class SeedUserSpec:
    label: str
    role: str
    email: str
    phone: str
    class_name: str = ""


def _specs(User) -> list[SeedUserSpec]:
    return [
        SeedUserSpec("Administrator", User.ROLE_ADMIN, "admin@example.com", "081234567890"),
        SeedUserSpec("Kale Student", User.ROLE_STUDENT, "kale@example.com", "081234567891", "XII RPL 1"),
        SeedUserSpec("Kale Gmail", User.ROLE_STUDENT, "kale@gmail.com", "081234567892", "XII RPL 2"),
        SeedUserSpec("Stand Owner", User.ROLE_STAND_ADMIN, "stand@example.com", "081234567893"),
    ]


def _upsert_user(*, User, spec: SeedUserSpec, password: str):
    """
    Idempotent:
    - create if missing (balance starts at zero; top-ups go through the ledger)
    - keep role aligned if the account already exists
    """
    user = User.objects.filter(email=spec.email).first()
    if user is not None:
        if user.role != spec.role:
            user.role = spec.role
            user.save(update_fields=["role", "updated_at"])
        return user, False

    extra = {"is_staff": True} if spec.role == User.ROLE_ADMIN else {}
    user = User.objects.create_user(
        email=spec.email,
        password=password,
        name=spec.label,
        role=spec.role,
        phone=spec.phone,
        class_name=spec.class_name,
        **extra,
    )
    return user, True


class Command(BaseCommand):
    help = "Seed demo canteen accounts (admin, students, one stand)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            type=str,
            default="Password.1",
            help="Password for seeded users (default: Password.1)",
        )
        parser.add_argument(
            "--force-password",
            action="store_true",
            help="If set, resets password for existing seeded users too.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options.get("password") or ""
        force_password = bool(options.get("force_password"))

        if len(password) < 6:
            raise CommandError("--password must be at least 6 characters.")

        User = get_user_model()
        created_count = 0

        self.stdout.write("Seeding canteen users ...")

        for spec in _specs(User):
            user, created = _upsert_user(User=User, spec=spec, password=password)

            if force_password and not created:
                user.set_password(password)
                user.save(update_fields=["password"])

            if user.role == User.ROLE_STAND_ADMIN:
                StandSettings.objects.get_or_create(stand=user, defaults={"store_name": spec.label})

            if created:
                created_count += 1
                self.stdout.write(f"created: {spec.label} <{spec.email}> ({spec.role})")
            else:
                self.stdout.write(f"exists:  {spec.label} <{spec.email}> ({spec.role})")

        self.stdout.write(f"\nCreated users: {created_count}")
