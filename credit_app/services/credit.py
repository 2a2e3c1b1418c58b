"""
Credit issuance and lookup.
A credit is always issued to an existing customer; the existence check and
the insert run in the same transaction with the customer row locked.
"""
import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db import transaction

from credit_app.exceptions import NotFoundError
from credit_app.models import Credit, CreditStatus, Customer
from credit_app.validation import (
    DEFAULT_FIRST_INSTALLMENT_WINDOW_DAYS,
    DEFAULT_MAX_INSTALLMENTS,
    validate_credit_terms,
)

logger = logging.getLogger(__name__)


def _check_terms(credit_value, day_first_installment, number_of_installments, today=None):
    validate_credit_terms(
        credit_value,
        day_first_installment,
        number_of_installments,
        today=today,
        max_installments=getattr(settings, 'CREDIT_MAX_INSTALLMENTS', DEFAULT_MAX_INSTALLMENTS),
        window_days=getattr(
            settings, 'CREDIT_FIRST_INSTALLMENT_WINDOW_DAYS', DEFAULT_FIRST_INSTALLMENT_WINDOW_DAYS
        ),
    )


def build_credit(
    customer: Customer,
    credit_value: Decimal,
    day_first_installment: date,
    number_of_installments: int,
    today: Optional[date] = None,
) -> Credit:
    """Return an unsaved IN_PROGRESS credit with a fresh code and the customer's current income."""
    _check_terms(credit_value, day_first_installment, number_of_installments, today=today)
    return Credit(
        customer=customer,
        credit_code=uuid.uuid4(),
        credit_value=credit_value,
        day_first_installment=day_first_installment,
        number_of_installments=number_of_installments,
        status=CreditStatus.IN_PROGRESS,
        income_customer=customer.income,
    )


class CreditService:
    def __init__(self, customers=None, credits=None):
        self.customers = customers if customers is not None else Customer.objects
        self.credits = credits if credits is not None else Credit.objects

    def create_credit(
        self,
        customer_id: int,
        credit_value: Decimal,
        day_first_installment: date,
        number_of_installments: int,
    ) -> Credit:
        today = date.today()
        _check_terms(credit_value, day_first_installment, number_of_installments, today=today)
        with transaction.atomic():
            customer = self.customers.select_for_update().filter(pk=customer_id).first()
            if customer is None:
                logger.warning("Rejected credit for unknown customer %s", customer_id)
                raise NotFoundError(f'Customer {customer_id} not found')
            credit = build_credit(
                customer, credit_value, day_first_installment, number_of_installments, today=today
            )
            credit.save(force_insert=True)
        logger.info("Credit %s issued to customer %s", credit.credit_code, customer_id)
        return credit

    def list_credits_by_customer(self, customer_id: int):
        return self.credits.filter(customer_id=customer_id).order_by('id')

    def find_credit_by_code(self, customer_id: int, credit_code) -> Credit:
        try:
            credit_code = uuid.UUID(str(credit_code))
        except ValueError:
            raise NotFoundError(f'Credit {credit_code} not found')
        credit = (
            self.credits.select_related('customer')
            .filter(credit_code=credit_code, customer_id=customer_id)
            .first()
        )
        if credit is None:
            raise NotFoundError(f'Credit {credit_code} not found')
        return credit
