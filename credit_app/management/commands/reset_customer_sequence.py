from django.core.management.base import BaseCommand
from django.db import connection

from credit_app.tasks import _reset_customer_sequence


class Command(BaseCommand):
    help = 'Reset Customer id sequence so new registrations work after Excel ingestion.'

    def handle(self, *args, **options):
        if connection.vendor != 'postgresql':
            self.stdout.write(self.style.WARNING(
                f'Nothing to reset on {connection.vendor}; sequences are PostgreSQL only.'
            ))
            return
        _reset_customer_sequence()
        self.stdout.write(self.style.SUCCESS('Customer id sequence reset.'))
