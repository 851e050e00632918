# vt_core/iam/management/commands/create_admin.py

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from vt_core.iam.models import Role, UserProfile
from vt_core.iam.services.users import UserService


class Command(BaseCommand):
    help = "Create (or promote) an admin account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)
        parser.add_argument("--first-name", default="Admin")
        parser.add_argument("--last-name", default="User")

    @transaction.atomic
    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        if not email:
            raise CommandError("--email must not be empty.")

        User = get_user_model()
        user = User.objects.filter(email__iexact=email).first()

        if user is None:
            UserService.create(
                email=email,
                password=options["password"],
                first_name=options["first_name"],
                last_name=options["last_name"],
                role=Role.ADMIN,
            )
            self.stdout.write(self.style.SUCCESS(f"Admin created: {email}"))
            return

        profile, _ = UserProfile.objects.get_or_create(user=user, defaults={"role": Role.ADMIN})
        if profile.role != Role.ADMIN:
            profile.role = Role.ADMIN
            profile.save(update_fields=["role", "updated_at"])
        self.stdout.write(self.style.SUCCESS(f"Admin ensured (already existed): {email}"))
