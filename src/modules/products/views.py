"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ``GenericViewSet``.
Domain exceptions propagate to ``envelope_exception_handler``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.responses import envelope
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.filters import ProductFilter
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    """

    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend]
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repository = ProductDjangoRepository()
        self._service = ProductService(repository=self._repository)

    def get_queryset(self):
        return self._repository.queryset()

    def list(self, request: Request) -> Response:
        """GET /api/products"""
        products = list(self.filter_queryset(self.get_queryset()))
        data = ProductSerializer(products, many=True).data
        return envelope(data, count=len(products))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        product = self._service.get_product(pk)
        return envelope(ProductSerializer(product).data)

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        dto = CreateProductDTO.model_validate(request.data)
        product = self._service.create_product(dto)
        return envelope(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/products/{pk}"""
        dto = UpdateProductDTO.model_validate(request.data)
        product = self._service.update_product(pk, dto)
        return envelope(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/products/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        self._service.delete_product(pk)
        return envelope({})
