import uuid

from django.db import models


class Customer(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    cpf = models.CharField(max_length=11, unique=True)
    email = models.EmailField(unique=True)
    income = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    password = models.CharField(max_length=128)
    zip_code = models.CharField(max_length=20)
    street = models.CharField(max_length=255)

    class Meta:
        db_table = 'credit_app_customer'


class CreditStatus(models.TextChoices):
    IN_PROGRESS = 'IN_PROGRESS'
    PAID = 'PAID'
    DEFAULTED = 'DEFAULTED'


class Credit(models.Model):
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='credits')
    credit_code = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    credit_value = models.DecimalField(max_digits=15, decimal_places=2)
    day_first_installment = models.DateField()
    number_of_installments = models.IntegerField()
    status = models.CharField(
        max_length=20, choices=CreditStatus.choices, default=CreditStatus.IN_PROGRESS
    )
    income_customer = models.DecimalField(max_digits=15, decimal_places=2, default=0)

    class Meta:
        db_table = 'credit_app_credit'
