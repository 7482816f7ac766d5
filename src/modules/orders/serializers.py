"""Order DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``.  Two projections
are rendered:

- write responses (place / amend) carry the customer and product ids;
- read responses (list / retrieve) expand the customer to
  ``{id, name, email}`` and each line's product to ``{id, name, price}``,
  or ``null`` when the referenced record was deleted.

The line's own price is always ``priceAtOrder``; the product's current
price appears only inside the expanded product.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem, OrderStatusHistory, related_or_none


class CustomerSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class ProductSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


# ---------------------------------------------------------------------------
# Write projection
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Line item with the product referenced by id."""

    product = serializers.UUIDField(source="product_id", read_only=True)
    priceAtOrder = serializers.DecimalField(
        source="price_at_order", max_digits=12, decimal_places=2, read_only=True
    )
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["product", "quantity", "priceAtOrder", "subtotal"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with customer and products referenced by id."""

    customer = serializers.UUIDField(source="customer_id", read_only=True)
    products = OrderItemSerializer(source="items", many=True, read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=12, decimal_places=2, read_only=True
    )
    stockReserved = serializers.BooleanField(source="stock_reserved", read_only=True)
    orderDate = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer",
            "products",
            "totalAmount",
            "status",
            "stockReserved",
            "orderDate",
            "updatedAt",
        ]
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Read projection
# ---------------------------------------------------------------------------


class OrderItemDetailSerializer(OrderItemSerializer):
    """Line item with the product expanded to ``{id, name, price}``."""

    product = serializers.SerializerMethodField()

    def get_product(self, item: OrderItem):
        product = related_or_none(item, "product")
        if product is None:
            return None
        return ProductSummarySerializer(product).data


class StatusHistorySerializer(serializers.ModelSerializer):
    oldStatus = serializers.CharField(source="old_status", read_only=True)
    newStatus = serializers.CharField(source="new_status", read_only=True)
    changedAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = OrderStatusHistory
        fields = ["oldStatus", "newStatus", "notes", "changedAt"]
        read_only_fields = fields


class OrderReadSerializer(OrderSerializer):
    """Order with customer and products expanded (list view)."""

    customer = serializers.SerializerMethodField()
    products = OrderItemDetailSerializer(source="items", many=True, read_only=True)

    def get_customer(self, order: Order):
        customer = related_or_none(order, "customer")
        if customer is None:
            return None
        return CustomerSummarySerializer(customer).data


class OrderDetailSerializer(OrderReadSerializer):
    """Expanded order with its status history (detail view)."""

    statusHistory = StatusHistorySerializer(
        source="status_history", many=True, read_only=True
    )

    class Meta(OrderReadSerializer.Meta):
        fields = OrderReadSerializer.Meta.fields + ["statusHistory"]
        read_only_fields = fields
