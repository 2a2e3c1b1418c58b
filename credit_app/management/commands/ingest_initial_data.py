import os

from django.conf import settings
from django.core.management.base import BaseCommand

from credit_app.tasks import ingest_credits_from_excel, ingest_customers_from_excel


class Command(BaseCommand):
    help = 'Enqueue Celery tasks to ingest customer_data.xlsx and credit_data.xlsx'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Run ingestion synchronously instead of via Celery',
        )

    def handle(self, *args, **options):
        customer_path = getattr(settings, 'CUSTOMER_DATA_PATH', None) or os.path.join(
            settings.BASE_DIR, 'data', 'customer_data.xlsx'
        )
        credit_path = getattr(settings, 'CREDIT_DATA_PATH', None) or os.path.join(
            settings.BASE_DIR, 'data', 'credit_data.xlsx'
        )

        for label, path in (('Customer', customer_path), ('Credit', credit_path)):
            if not os.path.isfile(path):
                self.stdout.write(self.style.WARNING(
                    f'{label} file not found: {path}. Place it in data/ and retry.'
                ))

        if options['sync']:
            self.stdout.write('Running ingestion synchronously...')
            r1 = ingest_customers_from_excel(customer_path)
            self.stdout.write(f'Customers: {r1}')
            r2 = ingest_credits_from_excel(credit_path)
            self.stdout.write(f'Credits: {r2}')
            self.stdout.write(self.style.SUCCESS('Done.'))
            return

        self.stdout.write('Enqueueing Celery tasks...')
        ingest_customers_from_excel.delay(customer_path)
        ingest_credits_from_excel.delay(credit_path)
        self.stdout.write(self.style.SUCCESS(
            'Tasks enqueued. Ensure Celery worker is running to process them.'
        ))
