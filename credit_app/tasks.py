import logging
import uuid
from datetime import date, datetime
from decimal import Decimal

import pandas as pd
from celery import shared_task
from django.contrib.auth.hashers import make_password
from django.db import connection, transaction

from .models import Credit, CreditStatus, Customer
from .validation import validate_cpf

logger = logging.getLogger(__name__)


def _reset_customer_sequence():
    """Reset Customer id sequence so new registrations don't conflict with ingested IDs."""
    if connection.vendor != 'postgresql':
        return
    with connection.cursor() as cursor:
        cursor.execute(
            "SELECT setval(pg_get_serial_sequence('credit_app_customer', 'id'), "
            "(SELECT COALESCE(MAX(id), 1) FROM credit_app_customer));"
        )


def _normalize_columns(df):
    df.columns = [
        str(c).strip().lower().replace(' ', '_') if isinstance(c, str) else c
        for c in df.columns
    ]
    return df


def _text(row, name, default=''):
    value = row.get(name)
    return str(value).strip() if pd.notna(value) else default


@shared_task
def ingest_customers_from_excel(file_path: str) -> dict:
    """Read customer_data.xlsx and upsert into Customer table."""
    try:
        df = pd.read_excel(file_path, dtype={'cpf': str, 'zip_code': str})
    except Exception as e:
        logger.exception("Failed to read customer Excel: %s", file_path)
        return {'ok': False, 'error': str(e), 'created': 0, 'updated': 0}

    df = _normalize_columns(df)
    created = updated = 0
    for _, row in df.iterrows():
        try:
            customer_id = int(row.get('customer_id', 0))
            cpf = validate_cpf(_text(row, 'cpf').zfill(11))
            email = _text(row, 'email')
            first_name = _text(row, 'first_name')
            last_name = _text(row, 'last_name')
            if not email or not (first_name or last_name):
                continue
            defaults = {
                'first_name': first_name or 'Unknown',
                'last_name': last_name or 'Unknown',
                'cpf': cpf,
                'email': email,
                'income': Decimal(_text(row, 'income', '0')),
                'zip_code': _text(row, 'zip_code'),
                'street': _text(row, 'street'),
                'password': make_password(_text(row, 'password') or None),
            }
            with transaction.atomic():
                obj, was_created = Customer.objects.update_or_create(
                    pk=customer_id,
                    defaults=defaults,
                )
            if was_created:
                created += 1
            else:
                updated += 1
        except Exception as e:
            logger.warning("Skip row %s: %s", row.to_dict(), e)
            continue
    _reset_customer_sequence()
    return {'ok': True, 'created': created, 'updated': updated}


def _parse_date(val):
    if val is None or (not isinstance(val, str) and pd.isna(val)):
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    if hasattr(val, 'date'):
        return val.date()
    if isinstance(val, str):
        try:
            return datetime.strptime(val[:10], '%Y-%m-%d').date()
        except ValueError:
            return None
    return None


@shared_task
def ingest_credits_from_excel(file_path: str) -> dict:
    """Read credit_data.xlsx and upsert into Credit table."""
    try:
        df = pd.read_excel(file_path)
    except Exception as e:
        logger.exception("Failed to read credit Excel: %s", file_path)
        return {'ok': False, 'error': str(e), 'created': 0, 'updated': 0}

    df = _normalize_columns(df)
    created = updated = 0
    for _, row in df.iterrows():
        try:
            code = _text(row, 'credit_code')
            credit_code = uuid.UUID(code) if code else uuid.uuid4()
            customer_id = int(row.get('customer_id', 0))
            credit_value = Decimal(str(row.get('credit_value', 0)))
            number_of_installments = int(row.get('number_of_installments', 0))
            day_first_installment = _parse_date(row.get('day_first_installment'))
            status = _text(row, 'status', CreditStatus.IN_PROGRESS).upper()
            if status not in CreditStatus.values:
                raise ValueError(f'unknown status {status}')
            if credit_value <= 0 or number_of_installments < 1 or day_first_installment is None:
                raise ValueError('credit value, installments and first installment date are required')

            try:
                customer = Customer.objects.get(pk=customer_id)
            except Customer.DoesNotExist:
                logger.warning("Customer %s not found for credit %s", customer_id, credit_code)
                continue

            with transaction.atomic():
                obj, was_created = Credit.objects.update_or_create(
                    credit_code=credit_code,
                    defaults={
                        'customer': customer,
                        'credit_value': credit_value,
                        'day_first_installment': day_first_installment,
                        'number_of_installments': number_of_installments,
                        'status': status,
                        'income_customer': customer.income,
                    },
                )
            if was_created:
                created += 1
            else:
                updated += 1
        except Exception as e:
            logger.warning("Skip credit row %s: %s", row.to_dict(), e)
            continue
    return {'ok': True, 'created': created, 'updated': updated}
