"""
manage.py seed_admin
====================
Creates the first administrator from ERP_ADMIN_EMAIL / ERP_ADMIN_PASSWORD.
Running it again is a no-op.
"""

import os

from django.core.management.base import BaseCommand, CommandError

from core.identity.service import ensure_admin


class Command(BaseCommand):
    help = "Create the initial admin user if it does not exist."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=os.environ.get("ERP_ADMIN_EMAIL"))
        parser.add_argument("--password", default=os.environ.get("ERP_ADMIN_PASSWORD"))
        parser.add_argument("--name", default="Admin")

    def handle(self, *args, **options):
        email = options["email"]
        password = options["password"]
        if not email or not password:
            raise CommandError(
                "Provide --email/--password or set ERP_ADMIN_EMAIL and ERP_ADMIN_PASSWORD."
            )
        try:
            user, created = ensure_admin(
                email=email,
                password=password,
                name=options["name"],
            )
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        if created:
            self.stdout.write(self.style.SUCCESS(f"Admin {user.email} created."))
        else:
            self.stdout.write(f"User {user.email} already exists; nothing to do.")
