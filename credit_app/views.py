from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import ConflictError, NotFoundError, ValidationError
from .serializers import (
    CreditCreatedSerializer,
    CreditDetailSerializer,
    CreditListItemSerializer,
    CreditSerializer,
    CustomerIdQuerySerializer,
    CustomerSerializer,
    CustomerUpdateSerializer,
    CustomerViewSerializer,
)
from .services.credit import CreditService
from .services.customer import CustomerService


def camel_case_errors(errors):
    """Rename service-level field errors (snake_case) to the JSON field names."""
    renamed = {}
    for name, messages in errors.items():
        head, *tail = name.split('_')
        renamed[head + ''.join(part.title() for part in tail)] = messages
    return renamed


def customer_id_from_query(request):
    serializer = CustomerIdQuerySerializer(data=request.query_params)
    serializer.is_valid()
    return serializer


class CustomerView(APIView):
    def post(self, request):
        serializer = CustomerSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            customer = CustomerService().register_customer(**serializer.validated_data)
        except ValidationError as e:
            return Response(camel_case_errors(e.errors), status=status.HTTP_400_BAD_REQUEST)
        except ConflictError as e:
            return Response({'detail': str(e)}, status=status.HTTP_409_CONFLICT)
        return Response(CustomerViewSerializer(customer).data, status=status.HTTP_201_CREATED)

    def patch(self, request):
        query = customer_id_from_query(request)
        if query.errors:
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        serializer = CustomerUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            customer = CustomerService().update_customer(
                query.validated_data['customer_id'], **serializer.validated_data
            )
        except NotFoundError as e:
            return Response({'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(CustomerViewSerializer(customer).data, status=status.HTTP_200_OK)


class CustomerDetailView(APIView):
    def get(self, request, customer_id):
        try:
            customer = CustomerService().get_customer(customer_id)
        except NotFoundError as e:
            return Response({'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(CustomerViewSerializer(customer).data, status=status.HTTP_200_OK)

    def delete(self, request, customer_id):
        try:
            CustomerService().delete_customer(customer_id)
        except NotFoundError as e:
            return Response({'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CreditView(APIView):
    def post(self, request):
        serializer = CreditSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            credit = CreditService().create_credit(**serializer.validated_data)
        except ValidationError as e:
            return Response(camel_case_errors(e.errors), status=status.HTTP_400_BAD_REQUEST)
        except NotFoundError as e:
            # Unknown customer on issuance is reported as a bad request.
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(CreditCreatedSerializer(credit).data, status=status.HTTP_201_CREATED)

    def get(self, request):
        query = customer_id_from_query(request)
        if query.errors:
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        credits = CreditService().list_credits_by_customer(query.validated_data['customer_id'])
        serializer = CreditListItemSerializer(credits, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


class CreditDetailView(APIView):
    def get(self, request, credit_code):
        query = customer_id_from_query(request)
        if query.errors:
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            credit = CreditService().find_credit_by_code(
                query.validated_data['customer_id'], credit_code
            )
        except NotFoundError as e:
            return Response({'detail': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(CreditDetailSerializer(credit).data, status=status.HTTP_200_OK)
