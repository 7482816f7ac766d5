"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ``GenericViewSet``.
Domain exceptions propagate to ``envelope_exception_handler``, which maps
them to status codes; views only translate HTTP into DTOs and back.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.responses import envelope
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.filters import CustomerFilter
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService


class CustomerViewSet(GenericViewSet):
    """ViewSet for Customer CRUD operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    filterset_class = CustomerFilter
    filter_backends = [DjangoFilterBackend]
    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = CustomerDjangoRepository()
        self._service = CustomerService(repository=self._repository)

    def get_queryset(self):
        return self._repository.queryset()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/customers"""
        customers = list(self.filter_queryset(self.get_queryset()))
        data = CustomerSerializer(customers, many=True).data
        return envelope(data, count=len(customers))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/customers/{pk}"""
        customer = self._service.get_customer(pk)
        return envelope(CustomerSerializer(customer).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/customers"""
        dto = CreateCustomerDTO.model_validate(request.data)
        customer = self._service.create_customer(dto)
        return envelope(
            CustomerSerializer(customer).data, status=status.HTTP_201_CREATED
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/customers/{pk}"""
        dto = UpdateCustomerDTO.model_validate(request.data)
        customer = self._service.update_customer(pk, dto)
        return envelope(CustomerSerializer(customer).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/customers/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/customers/{pk}"""
        self._service.delete_customer(pk)
        return envelope({})
