"""Input validation rules for customer and credit records."""
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from credit_app.exceptions import ValidationError

DEFAULT_MAX_INSTALLMENTS = 48
DEFAULT_FIRST_INSTALLMENT_WINDOW_DAYS = 90


def validate_cpf(cpf: str) -> str:
    """Validate a CPF by its two check digits and return the 11 bare digits."""
    digits = cpf.replace('.', '').replace('-', '').strip()
    if not digits.isdigit() or len(digits) != 11:
        raise ValueError('CPF must have 11 digits.')
    if digits == digits[0] * 11:
        raise ValueError('Invalid CPF.')

    for position in (9, 10):
        total = sum(int(digits[i]) * (position + 1 - i) for i in range(position))
        check = (total * 10) % 11 % 10
        if check != int(digits[position]):
            raise ValueError('Invalid CPF.')

    return digits


def validate_credit_terms(
    credit_value: Decimal,
    day_first_installment: date,
    number_of_installments: int,
    *,
    today: Optional[date] = None,
    max_installments: int = DEFAULT_MAX_INSTALLMENTS,
    window_days: int = DEFAULT_FIRST_INSTALLMENT_WINDOW_DAYS,
) -> None:
    """
    Raise ValidationError listing every broken rule:
    value must be positive, installments within 1..max_installments,
    first installment after today and no more than window_days ahead.
    """
    today = today or date.today()
    errors = {}

    if credit_value is None or credit_value <= 0:
        errors['credit_value'] = ['Credit value must be greater than zero.']

    if number_of_installments is None or number_of_installments < 1:
        errors['number_of_installments'] = ['Number of installments must be at least 1.']
    elif number_of_installments > max_installments:
        errors['number_of_installments'] = [
            f'Number of installments must be at most {max_installments}.'
        ]

    if day_first_installment is None or day_first_installment <= today:
        errors['day_first_installment'] = ['First installment must be in the future.']
    elif day_first_installment > today + timedelta(days=window_days):
        errors['day_first_installment'] = [
            f'First installment must be within {window_days} days.'
        ]

    if errors:
        raise ValidationError(errors)
