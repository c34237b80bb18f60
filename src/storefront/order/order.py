"""Order aggregate — a customer's cart and, after checkout, the placed order.

An Order starts life as the customer's cart and moves strictly forward:

    cart → processing → shipped → delivered

Only checkout moves a cart to processing. Items can only be changed while the
order is still a cart, and each product appears at most once: setting a
quantity overwrites the existing line instead of adding a second one.
"""

import json
from collections import defaultdict
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import (
    CartCreated,
    CartItemAdded,
    CartItemRemoved,
    CartItemUpdated,
    OrderDelivered,
    OrderPlaced,
    OrderShipped,
    PaymentUpdated,
)
from storefront.shared.errors import BusinessRuleViolation, InvalidStatusTransition, MalformedInput


class OrderStatus(Enum):
    CART = "cart"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.CART: {OrderStatus.PROCESSING},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise MalformedInput(
            {"status": ["Status must be one of 'cart', 'processing', 'shipped', or 'delivered'."]}
        ) from None


def validate_status_transition(old, new) -> None:
    """Raise ``InvalidStatusTransition`` unless ``old → new`` is a legal move.

    Accepts either ``OrderStatus`` members or their string values. Same-state,
    backward and skip-ahead moves are all rejected.
    """
    current = parse_status(old)
    target = parse_status(new)
    if target not in _VALID_TRANSITIONS[current]:
        raise InvalidStatusTransition(
            {"status": [f"Invalid status transition from '{current.value}' to '{target.value}'."]}
        )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """One product line in an order. Quantity is always positive."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.CART.value)
    payment = Text(default="{}")  # JSON object, free-form
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()
    placed_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["Each product can appear only once in an order"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open_cart(cls, customer_id):
        """Start an empty cart for ``customer_id``."""
        now = datetime.now(UTC)
        cart = cls(
            customer_id=customer_id,
            status=OrderStatus.CART.value,
            payment=json.dumps({}),
            created_at=now,
            updated_at=now,
        )
        cart.raise_(
            CartCreated(
                order_id=str(cart.id),
                customer_id=str(customer_id),
                created_at=now,
            )
        )
        return cart

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_cart(self) -> bool:
        return OrderStatus(self.status) == OrderStatus.CART

    @property
    def payment_details(self) -> dict:
        return json.loads(self.payment) if self.payment else {}

    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def quantities_by_product(self) -> dict[str, int]:
        """Total quantity requested per product across all lines."""
        totals = defaultdict(int)
        for item in self.items:
            totals[str(item.product_id)] += item.quantity
        return dict(totals)

    # -------------------------------------------------------------------
    # Cart reconciliation
    # -------------------------------------------------------------------
    def set_item_quantity(self, product_id, quantity):
        """Make the cart hold exactly ``quantity`` of ``product_id``.

        Overwrites rather than increments, so repeating the call is a no-op.
        A quantity of 0 drops the line.
        """
        if not self.is_cart:
            raise BusinessRuleViolation({"status": ["Items can only be changed while the order is a cart."]})
        if quantity is None or quantity < 0:
            raise BusinessRuleViolation({"quantity": ["Quantity must be a non-negative integer."]})

        existing = self.item_for(product_id)
        now = datetime.now(UTC)

        if existing is None:
            if quantity == 0:
                return None
            item = OrderItem(product_id=product_id, quantity=quantity)
            self.add_items(item)
            self.updated_at = now
            self.raise_(
                CartItemAdded(
                    order_id=str(self.id),
                    item_id=str(item.id),
                    product_id=str(product_id),
                    quantity=quantity,
                )
            )
            return item

        if quantity == 0:
            self.remove_items(existing)
            self.updated_at = now
            self.raise_(
                CartItemRemoved(
                    order_id=str(self.id),
                    item_id=str(existing.id),
                    product_id=str(product_id),
                )
            )
            return None

        if existing.quantity == quantity:
            return existing

        previous_quantity = existing.quantity
        existing.quantity = quantity
        self.updated_at = now
        self.raise_(
            CartItemUpdated(
                order_id=str(self.id),
                item_id=str(existing.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return existing

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def record_payment(self, payment):
        """Merge ``payment`` into the stored payment details of a cart."""
        if not self.is_cart:
            raise BusinessRuleViolation(
                {"payment": ["Can not update payment information after an order has been placed."]}
            )

        merged = {**self.payment_details, **(payment or {})}
        self.payment = json.dumps(merged)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PaymentUpdated(
                order_id=str(self.id),
                payment_fields=json.dumps(sorted(merged.keys())),
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def place(self, payment=None):
        """Move a checked-out cart to processing.

        Stock checks and decrements belong to checkout; this only records the
        transition and the payment used.
        """
        validate_status_transition(self.status, OrderStatus.PROCESSING)

        if payment:
            self.payment = json.dumps({**self.payment_details, **payment})

        now = datetime.now(UTC)
        self.status = OrderStatus.PROCESSING.value
        self.placed_at = now
        self.updated_at = now

        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                items=json.dumps(self.quantities_by_product()),
                placed_at=now,
            )
        )

    def advance_to(self, new_status):
        """Move a placed order forward to shipped or delivered."""
        target = parse_status(new_status)
        validate_status_transition(self.status, target)
        if target == OrderStatus.PROCESSING:
            raise BusinessRuleViolation({"status": ["An order can only move to processing through checkout."]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.SHIPPED:
            self.raise_(OrderShipped(order_id=str(self.id), shipped_at=now))
        else:
            self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))
