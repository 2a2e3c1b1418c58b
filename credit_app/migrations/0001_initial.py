# Generated manually for credit_app

from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('cpf', models.CharField(max_length=11, unique=True)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('income', models.DecimalField(decimal_places=2, default=0, max_digits=15)),
                ('password', models.CharField(max_length=128)),
                ('zip_code', models.CharField(max_length=20)),
                ('street', models.CharField(max_length=255)),
            ],
            options={
                'db_table': 'credit_app_customer',
            },
        ),
        migrations.CreateModel(
            name='Credit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('credit_code', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('credit_value', models.DecimalField(decimal_places=2, max_digits=15)),
                ('day_first_installment', models.DateField()),
                ('number_of_installments', models.IntegerField()),
                ('status', models.CharField(choices=[('IN_PROGRESS', 'In Progress'), ('PAID', 'Paid'), ('DEFAULTED', 'Defaulted')], default='IN_PROGRESS', max_length=20)),
                ('income_customer', models.DecimalField(decimal_places=2, default=0, max_digits=15)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='credits', to='credit_app.customer')),
            ],
            options={
                'db_table': 'credit_app_credit',
            },
        ),
    ]
