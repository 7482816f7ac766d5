"""Order service layer (Use Cases).

Orchestrates the order workflow: placement, amendment and deletion, each
with its stock side effects.  Every command is one database transaction
that locks the rows it mutates (order row first, then products sorted by
id) and validates every line before anything is written.

Business rules enforced:
- The customer and every referenced product must exist.
- Line quantities must be positive and covered by stock.
- ``price_at_order`` snapshots the product price; ``total_amount`` is the
  sum of the line subtotals.
- Closed orders (completed / cancelled) accept only a status change.
- ``pending -> cancelled`` and deleting a pending order return the
  reserved stock; ``stock_reserved`` guarantees each reservation is
  returned at most once.
- A completed order always holds its stock: completing an order without
  a live reservation reserves its lines again.
- Every status change is recorded in the order's history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.identifiers import parse_identifier
from modules.customers.exceptions import CustomerNotFound
from modules.orders.constants import CLOSED_STATUS_UPDATED_MESSAGE, OrderStatus
from modules.orders.events import (
    OrderAmended,
    OrderDeleted,
    OrderPlaced,
    OrderStatusChanged,
)
from modules.orders.exceptions import (
    ClosedOrderModification,
    InvalidOrderStatus,
    OrderNotFound,
)
from modules.orders.models import Order
from modules.orders.stock import StockLedger, total_of

if TYPE_CHECKING:
    from uuid import UUID

    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import AmendOrderDTO, OrderLineDTO, PlaceOrderDTO
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AmendResult:
    """Outcome of ``OrderService.amend_order``."""

    order: Order
    message: Optional[str] = None


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def place_order(self, dto: PlaceOrderDTO) -> Order:
        """Place a new order and reserve its stock.

        Steps:
        1. Validate the requested status (defaults to ``pending``).
        2. Validate the customer exists.
        3. Lock the referenced products (sorted by id) and validate every
           line, in caller order, against an in-memory stock snapshot.
        4. Write the stock decrements, the order, its items and the first
           history record.

        An order placed as ``cancelled`` is validated but reserves nothing.

        Raises:
            InvalidOrderStatus: unknown status.
            CustomerNotFound: customer does not exist.
            ProductNotFound: a product does not exist.
            InvalidQuantity: a line quantity is not positive.
            InsufficientStock: not enough stock for a line.
        """
        log = logger.bind(customer_id=str(dto.customer_id))
        log.info("order.placement_started", line_count=len(dto.lines))

        status = self._resolve_status(dto.status, default=OrderStatus.PENDING)

        if not self._customer_repo.get_by_id(dto.customer_id):
            raise CustomerNotFound()

        ledger = self._lock_products(line.product_id for line in dto.lines)
        reserved = ledger.reserve(dto.lines)

        reserve_stock = status != OrderStatus.CANCELLED
        if reserve_stock:
            ledger.commit(self._product_repo)

        order = Order(
            customer_id=dto.customer_id,
            status=status,
            total_amount=total_of(reserved),
            stock_reserved=reserve_stock,
        )
        order.add_domain_event(
            OrderPlaced(
                aggregate_id=order.id,
                customer_id=dto.customer_id,
                status=status,
                total_amount=order.total_amount,
                stock_reserved=reserve_stock,
            )
        )
        self._order_repo.save(order)
        self._order_repo.replace_items(order, reserved)
        self._order_repo.add_history(order, new_status=status, notes="Order placed")

        log.info(
            "order.placed",
            order_id=str(order.id),
            status=status,
            total_amount=str(order.total_amount),
            stock_reserved=reserve_stock,
        )
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def amend_order(self, order_id: Any, dto: AmendOrderDTO) -> AmendResult:
        """Change an order's status and/or replace its line items.

        Closed orders accept only a change to a different status, with no
        stock effects unless a released order is completed (its lines are
        reserved again).  On a pending order the new status is validated
        first; a replacement line list is applied only while the order
        stays pending, and is ignored otherwise.

        Raises:
            MalformedIdentifier: ``order_id`` is not a valid identifier.
            OrderNotFound: order does not exist.
            ClosedOrderModification: closed order asked for more than a
                status change.
            InvalidOrderStatus: unknown status.
            ProductNotFound / InvalidQuantity / InsufficientStock: a
                replacement line is invalid, or the stock for completing a
                released order is missing; nothing is changed.
        """
        order = self._get_for_update(order_id)
        log = logger.bind(order_id=str(order.id), current_status=order.status)

        if order.is_closed:
            return self._amend_closed_order(order, dto, log)

        new_status = self._resolve_status(dto.status, default=order.status)

        if dto.lines is not None:
            if new_status == OrderStatus.PENDING:
                self._replace_lines(order, dto.lines, log)
            else:
                log.info("order.line_items_ignored", new_status=new_status)

        if new_status != order.status:
            self._change_status(order, new_status, log)

        self._order_repo.save(order)
        log.info("order.amended", status=order.status)
        return AmendResult(order=self._order_repo.get_by_id(order.id) or order)

    @transaction.atomic
    def delete_order(self, order_id: Any) -> None:
        """Permanently delete an order.

        A pending order holding a reservation returns every line's
        quantity to its product first (deleted products are skipped).

        Raises:
            MalformedIdentifier: ``order_id`` is not a valid identifier.
            OrderNotFound: order does not exist.
        """
        order = self._get_for_update(order_id)
        log = logger.bind(order_id=str(order.id), status=order.status)

        release = order.status == OrderStatus.PENDING and order.stock_reserved
        if release:
            self._release(order)

        order.add_domain_event(
            OrderDeleted(
                aggregate_id=order.id, status=order.status, stock_released=release
            )
        )
        self._order_repo.remove(order)
        log.info("order.removed", stock_released=release)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: Any) -> Order:
        """Retrieve a single order by ID.

        Raises:
            MalformedIdentifier: ``order_id`` is not a valid identifier.
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(parse_identifier(order_id, "Order"))
        if not order:
            raise OrderNotFound()
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Return every order, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Workflow steps
    # ------------------------------------------------------------------

    def _get_for_update(self, order_id: Any) -> Order:
        order = self._order_repo.get_for_update(parse_identifier(order_id, "Order"))
        if not order:
            raise OrderNotFound()
        return order

    def _lock_products(self, product_ids) -> StockLedger:
        return StockLedger(self._product_repo.get_many_for_update(product_ids))

    def _amend_closed_order(self, order: Order, dto: AmendOrderDTO, log) -> AmendResult:
        if dto.lines is not None or not dto.status or dto.status == order.status:
            log.warning("order.closed_modification_rejected")
            raise ClosedOrderModification()

        new_status = self._resolve_status(dto.status, default=order.status)
        if new_status == OrderStatus.COMPLETED and not order.stock_reserved:
            self._reserve_current_lines(order)
        self._record_status(order, new_status, notes="Closed order status updated")
        self._order_repo.save(order)
        log.info("order.closed_status_updated", new_status=new_status)
        return AmendResult(
            order=self._order_repo.get_by_id(order.id) or order,
            message=CLOSED_STATUS_UPDATED_MESSAGE,
        )

    def _replace_lines(self, order: Order, lines: List[OrderLineDTO], log) -> None:
        """Release the current lines and reserve *lines* against one snapshot."""
        current_items = list(order.items.all())
        product_ids = {item.product_id for item in current_items}
        product_ids.update(line.product_id for line in lines)

        ledger = self._lock_products(product_ids)
        if order.stock_reserved:
            ledger.release(current_items)
        reserved = ledger.reserve(lines)
        ledger.commit(self._product_repo)

        self._order_repo.replace_items(order, reserved)
        order.total_amount = total_of(reserved)
        order.stock_reserved = True
        order.add_domain_event(
            OrderAmended(
                aggregate_id=order.id,
                total_amount=order.total_amount,
                line_count=len(reserved),
            )
        )
        log.info(
            "order.lines_replaced",
            line_count=len(reserved),
            total_amount=str(order.total_amount),
        )

    def _change_status(self, order: Order, new_status: str, log) -> None:
        released = False
        if new_status == OrderStatus.COMPLETED and not order.stock_reserved:
            self._reserve_current_lines(order)
        if new_status == OrderStatus.CANCELLED and order.stock_reserved:
            self._release(order)
            released = True
        self._record_status(order, new_status, stock_released=released)
        log.info("order.status_changed", new_status=new_status, stock_released=released)

    def _record_status(
        self,
        order: Order,
        new_status: str,
        *,
        notes: str = "",
        stock_released: bool = False,
    ) -> None:
        old_status = order.status
        order.status = new_status
        self._order_repo.add_history(
            order, new_status=new_status, old_status=old_status, notes=notes
        )
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=new_status,
                stock_released=stock_released,
            )
        )

    def _reserve_current_lines(self, order: Order) -> None:
        """Take the order's existing lines out of stock, keeping their prices.

        A completed order always holds its stock, so completing an order
        whose reservation was released (cancelled, or placed as cancelled)
        reserves the lines again.  A shortage changes nothing.
        """
        items = list(order.items.all())
        ledger = self._lock_products(item.product_id for item in items)
        ledger.reserve(items)
        ledger.commit(self._product_repo)
        order.stock_reserved = True
        logger.info("order.stock_rereserved", order_id=str(order.id))

    def _release(self, order: Order) -> None:
        items = list(order.items.all())
        ledger = self._lock_products(item.product_id for item in items)
        ledger.release(items)
        ledger.commit(self._product_repo)
        order.stock_reserved = False

    @staticmethod
    def _resolve_status(value: Optional[str], default: str) -> str:
        if not value:
            return default
        if value not in OrderStatus.values:
            raise InvalidOrderStatus()
        return value
