from rest_framework import serializers

from .models import Credit, Customer


class MoneyField(serializers.DecimalField):
    """Decimal rendered as a JSON number; whole amounts come back as integers."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 15)
        kwargs.setdefault('decimal_places', 2)
        kwargs['coerce_to_string'] = False
        super().__init__(**kwargs)

    def to_representation(self, value):
        value = super().to_representation(value)
        if value == value.to_integral_value():
            return int(value)
        return value.normalize()


class CustomerSerializer(serializers.Serializer):
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    cpf = serializers.CharField(max_length=14)
    email = serializers.EmailField()
    income = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0)
    password = serializers.CharField(max_length=128, write_only=True)
    zipCode = serializers.CharField(source='zip_code', max_length=20)
    street = serializers.CharField(max_length=255)


class CustomerUpdateSerializer(serializers.Serializer):
    firstName = serializers.CharField(source='first_name', max_length=100, required=False)
    lastName = serializers.CharField(source='last_name', max_length=100, required=False)
    income = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    zipCode = serializers.CharField(source='zip_code', max_length=20, required=False)
    street = serializers.CharField(max_length=255, required=False)


class CustomerViewSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    income = MoneyField(read_only=True)
    zipCode = serializers.CharField(source='zip_code')

    class Meta:
        model = Customer
        fields = ['id', 'firstName', 'lastName', 'cpf', 'email', 'income', 'zipCode', 'street']


class CustomerIdQuerySerializer(serializers.Serializer):
    customerId = serializers.IntegerField(source='customer_id', min_value=1)


class CreditSerializer(serializers.Serializer):
    creditValue = serializers.DecimalField(source='credit_value', max_digits=15, decimal_places=2)
    dayFirstInstallment = serializers.DateField(source='day_first_installment')
    numberOfInstallments = serializers.IntegerField(source='number_of_installments')
    customerId = serializers.IntegerField(source='customer_id')


class CreditCreatedSerializer(serializers.ModelSerializer):
    creditCode = serializers.UUIDField(source='credit_code', read_only=True)
    creditValue = MoneyField(source='credit_value', read_only=True)
    dayFirstInstallment = serializers.DateField(source='day_first_installment', read_only=True)
    numberOfInstallments = serializers.IntegerField(source='number_of_installments', read_only=True)
    customerId = serializers.IntegerField(source='customer_id', read_only=True)

    class Meta:
        model = Credit
        fields = [
            'creditCode', 'creditValue', 'dayFirstInstallment',
            'numberOfInstallments', 'status', 'customerId',
        ]


class CreditListItemSerializer(serializers.ModelSerializer):
    creditCode = serializers.UUIDField(source='credit_code', read_only=True)
    creditValue = MoneyField(source='credit_value', read_only=True)
    numberOfInstallments = serializers.IntegerField(source='number_of_installments', read_only=True)

    class Meta:
        model = Credit
        fields = ['creditCode', 'creditValue', 'numberOfInstallments']


class CreditDetailSerializer(CreditCreatedSerializer):
    emailCustomer = serializers.EmailField(source='customer.email', read_only=True)
    incomeCustomer = MoneyField(source='income_customer', read_only=True)

    class Meta(CreditCreatedSerializer.Meta):
        fields = CreditCreatedSerializer.Meta.fields + ['emailCustomer', 'incomeCustomer']
