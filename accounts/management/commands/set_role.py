from django.core.management.base import BaseCommand, CommandError

from accounts.domain import UserRole
from accounts.models import UserProfile


class Command(BaseCommand):
    help = "Assign a role (CUSTOMER or ADMIN) to an existing account."

    def add_arguments(self, parser):
        parser.add_argument("email")
        parser.add_argument("role")

    def handle(self, *args, **options):
        role = UserRole.from_value(options["role"])
        if role is None:
            raise CommandError(f"Unknown role {options['role']!r}")
        email = options["email"].strip().lower()
        updated = UserProfile.objects.filter(email=email).update(role=role.value)
        if not updated:
            raise CommandError(f"No profile found for {email}")
        self.stdout.write(self.style.SUCCESS(f"{email} is now {role.value}"))
