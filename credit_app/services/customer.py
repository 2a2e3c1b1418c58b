import logging

from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction

from credit_app.exceptions import ConflictError, NotFoundError, ValidationError
from credit_app.models import Customer
from credit_app.validation import validate_cpf

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('first_name', 'last_name', 'income', 'zip_code', 'street')


class CustomerService:
    def __init__(self, customers=None):
        self.customers = customers if customers is not None else Customer.objects

    def register_customer(self, *, first_name, last_name, cpf, email, income, password,
                          zip_code, street) -> Customer:
        try:
            cpf = validate_cpf(cpf)
        except ValueError as e:
            raise ValidationError({'cpf': [str(e)]})
        try:
            with transaction.atomic():
                customer = self.customers.create(
                    first_name=first_name,
                    last_name=last_name,
                    cpf=cpf,
                    email=email,
                    income=income,
                    password=make_password(password),
                    zip_code=zip_code,
                    street=street,
                )
        except IntegrityError:
            logger.warning("Duplicate customer registration for %s", email)
            raise ConflictError('A customer with this cpf or email already exists')
        logger.info("Customer %s registered", customer.pk)
        return customer

    def get_customer(self, customer_id: int) -> Customer:
        try:
            return self.customers.get(pk=customer_id)
        except Customer.DoesNotExist:
            raise NotFoundError(f'Customer {customer_id} not found')

    def update_customer(self, customer_id: int, **changes) -> Customer:
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError({name: ['This field cannot be updated.'] for name in sorted(unknown)})
        customer = self.get_customer(customer_id)
        for name, value in changes.items():
            setattr(customer, name, value)
        if changes:
            customer.save(update_fields=list(changes))
        return customer

    def delete_customer(self, customer_id: int) -> None:
        customer = self.get_customer(customer_id)
        customer.delete()
        logger.info("Customer %s deleted", customer_id)
