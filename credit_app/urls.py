from django.urls import path

from .views import CreditDetailView, CreditView, CustomerDetailView, CustomerView

urlpatterns = [
    path('customers', CustomerView.as_view(), name='customers'),
    path('customers/<int:customer_id>', CustomerDetailView.as_view(), name='customer-detail'),
    path('credits', CreditView.as_view(), name='credits'),
    path('credits/<uuid:credit_code>', CreditDetailView.as_view(), name='credit-detail'),
]
