"""Tests for spreadsheet ingestion tasks and management commands."""
import uuid
from datetime import date
from decimal import Decimal
from io import StringIO
from unittest import mock

import pandas as pd
from django.core.management import call_command
from django.test import TestCase

from credit_app.models import Credit, CreditStatus, Customer
from credit_app.tasks import _parse_date, ingest_credits_from_excel, ingest_customers_from_excel

CUSTOMER_SHEET = pd.DataFrame(
    {
        'Customer ID': [10, 11, 12],
        'First Name': ['Cami', 'Bruno', ''],
        'Last Name': ['Cavalcante', 'Lima', ''],
        'CPF': ['28475934625', '52998224725', '11144477735'],
        'Email': ['camila@email.com', 'bruno@email.com', 'nobody@email.com'],
        'Income': [1000.0, 2500.5, 10.0],
        'Zip Code': ['000000', '111111', '222222'],
        'Street': ['Rua da Cami, 123', 'Rua B, 2', 'Rua C, 3'],
    }
)


class IngestCustomersTests(TestCase):
    @mock.patch('credit_app.tasks.pd.read_excel')
    def test_upserts_customers_and_skips_unnamed_rows(self, read_excel):
        read_excel.return_value = CUSTOMER_SHEET.copy()
        result = ingest_customers_from_excel('customer_data.xlsx')
        self.assertEqual(result, {'ok': True, 'created': 2, 'updated': 0})
        customer = Customer.objects.get(pk=10)
        self.assertEqual((customer.first_name, customer.last_name), ('Cami', 'Cavalcante'))
        self.assertEqual(customer.income, Decimal('1000.00'))

        read_excel.return_value = CUSTOMER_SHEET.copy()
        result = ingest_customers_from_excel('customer_data.xlsx')
        self.assertEqual(result, {'ok': True, 'created': 0, 'updated': 2})
        self.assertEqual(Customer.objects.count(), 2)

    @mock.patch('credit_app.tasks.pd.read_excel')
    def test_invalid_cpf_row_is_skipped(self, read_excel):
        sheet = CUSTOMER_SHEET.head(1).copy()
        sheet['CPF'] = ['28475934626']
        read_excel.return_value = sheet
        result = ingest_customers_from_excel('customer_data.xlsx')
        self.assertEqual(result['created'], 0)
        self.assertFalse(Customer.objects.exists())

    @mock.patch('credit_app.tasks.pd.read_excel', side_effect=FileNotFoundError('missing'))
    def test_unreadable_file_reports_error(self, read_excel):
        result = ingest_customers_from_excel('missing.xlsx')
        self.assertFalse(result['ok'])
        self.assertIn('missing', result['error'])


class IngestCreditsTests(TestCase):
    def setUp(self):
        self.customer = Customer.objects.create(
            id=10,
            first_name='Cami',
            last_name='Cavalcante',
            cpf='28475934625',
            email='camila@email.com',
            income=Decimal('1000.00'),
            password='1234',
            zip_code='000000',
            street='Rua da Cami, 123',
        )

    @mock.patch('credit_app.tasks.pd.read_excel')
    def test_upserts_credits_for_known_customers(self, read_excel):
        code = uuid.uuid4()
        read_excel.return_value = pd.DataFrame(
            {
                'Credit Code': [str(code), None, None],
                'Customer ID': [10, 10, 99],
                'Credit Value': [1500.0, 300.0, 10.0],
                'Day First Installment': [
                    pd.Timestamp('2024-03-01'), '2024-05-10', '2024-05-10',
                ],
                'Number Of Installments': [12, 3, 1],
                'Status': ['paid', None, None],
            }
        )
        result = ingest_credits_from_excel('credit_data.xlsx')
        self.assertEqual(result, {'ok': True, 'created': 2, 'updated': 0})

        credit = Credit.objects.get(credit_code=code)
        self.assertEqual(credit.status, CreditStatus.PAID)
        self.assertEqual(credit.day_first_installment, date(2024, 3, 1))
        self.assertEqual(credit.income_customer, Decimal('1000.00'))
        other = Credit.objects.exclude(credit_code=code).get()
        self.assertEqual(other.status, CreditStatus.IN_PROGRESS)

    def test_parse_date_accepts_plain_dates(self):
        self.assertEqual(_parse_date(date(2024, 5, 10)), date(2024, 5, 10))
        self.assertEqual(_parse_date(pd.Timestamp('2024-05-10 13:00')), date(2024, 5, 10))
        self.assertIsNone(_parse_date('not a date'))

    @mock.patch('credit_app.tasks.pd.read_excel')
    def test_object_column_with_date_values_is_loaded(self, read_excel):
        read_excel.return_value = pd.DataFrame(
            {
                'Customer ID': [10],
                'Credit Value': [100.0],
                'Day First Installment': pd.Series([date(2024, 5, 10)], dtype=object),
                'Number Of Installments': [2],
            }
        )
        result = ingest_credits_from_excel('credit_data.xlsx')
        self.assertEqual(result['created'], 1)
        self.assertEqual(Credit.objects.get().day_first_installment, date(2024, 5, 10))

    @mock.patch('credit_app.tasks.pd.read_excel')
    def test_rows_with_bad_status_are_skipped(self, read_excel):
        read_excel.return_value = pd.DataFrame(
            {
                'Customer ID': [10],
                'Credit Value': [100.0],
                'Day First Installment': ['2024-05-10'],
                'Number Of Installments': [2],
                'Status': ['APPROVED'],
            }
        )
        result = ingest_credits_from_excel('credit_data.xlsx')
        self.assertEqual(result['created'], 0)
        self.assertEqual(Credit.objects.count(), 0)


class ManagementCommandTests(TestCase):
    @mock.patch('credit_app.tasks.pd.read_excel')
    def test_ingest_initial_data_sync(self, read_excel):
        def sheet_for(path, **kwargs):
            if 'customer' in str(path):
                return CUSTOMER_SHEET.copy()
            return pd.DataFrame(
                {
                    'Customer ID': [10],
                    'Credit Value': [100.0],
                    'Day First Installment': ['2024-05-10'],
                    'Number Of Installments': [2],
                }
            )

        read_excel.side_effect = sheet_for
        out = StringIO()
        with self.settings(CUSTOMER_DATA_PATH='/tmp/customer_data.xlsx',
                           CREDIT_DATA_PATH='/tmp/credit_data.xlsx'):
            call_command('ingest_initial_data', '--sync', stdout=out)
        self.assertIn('Done.', out.getvalue())
        self.assertEqual(Customer.objects.count(), 2)
        self.assertEqual(Credit.objects.count(), 1)

    @mock.patch('credit_app.management.commands.ingest_initial_data.ingest_credits_from_excel')
    @mock.patch('credit_app.management.commands.ingest_initial_data.ingest_customers_from_excel')
    def test_ingest_initial_data_enqueues(self, customers_task, credits_task):
        out = StringIO()
        call_command('ingest_initial_data', stdout=out)
        customers_task.delay.assert_called_once()
        credits_task.delay.assert_called_once()
        self.assertIn('Tasks enqueued', out.getvalue())

    def test_reset_sequence_is_noop_outside_postgres(self):
        out = StringIO()
        call_command('reset_customer_sequence', stdout=out)
        self.assertIn('PostgreSQL only', out.getvalue())
