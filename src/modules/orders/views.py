"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ``GenericViewSet``.
Domain exceptions propagate to ``envelope_exception_handler``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.responses import envelope
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import AmendOrderDTO, PlaceOrderDTO
from modules.orders.filters import OrderFilter
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    OrderDetailSerializer,
    OrderReadSerializer,
    OrderSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]
    serializer_class = OrderReadSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = OrderDjangoRepository()
        self._service = OrderService(
            order_repository=self._repository,
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def get_queryset(self):
        return self._repository.queryset()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/orders

        Filtering (status, customer, date range, total range) is handled
        by ``OrderFilter`` via ``filter_backends``.
        """
        orders = list(self.filter_queryset(self.get_queryset()))
        data = OrderReadSerializer(orders, many=True).data
        return envelope(data, count=len(orders))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/orders/{pk}"""
        order = self._service.get_order(pk)
        return envelope(OrderDetailSerializer(order).data)

    # ------------------------------------------------------------------
    # Place / Amend / Delete
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/orders

        Body: ``{"customer": id, "products": [{"product": id, "quantity": n}],
        "status"?: str}``.
        """
        dto = PlaceOrderDTO.model_validate(request.data)
        order = self._service.place_order(dto)
        return envelope(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/orders/{pk}

        Body: ``{"status"?: str, "products"?: [...]}``.  A status change on
        a closed order answers with ``message: "Order status updated."``.
        """
        dto = AmendOrderDTO.model_validate(request.data)
        result = self._service.amend_order(pk, dto)
        return envelope(OrderSerializer(result.order).data, message=result.message)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/orders/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/orders/{pk}"""
        self._service.delete_order(pk)
        return envelope({})
