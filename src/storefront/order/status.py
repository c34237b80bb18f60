"""Generic order updates: status moves and payment changes."""

import json

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.checkout import checkout
from storefront.order.order import Order, OrderStatus, parse_status

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrder:
    """Partially update an order.

    A status of ``processing`` goes through checkout. Later statuses only need
    a valid transition. Payment can be changed while the order is a cart.
    """

    order_id = Identifier(required=True)
    status = String(max_length=20)
    payment = Text()  # JSON object


@storefront.command_handler(part_of=Order)
class UpdateOrderHandler:
    @handle(UpdateOrder)
    def update_order(self, command):
        payment = json.loads(command.payment) if command.payment else None

        if command.status is not None and parse_status(command.status) == OrderStatus.PROCESSING:
            return str(checkout(command.order_id, command.status, payment).id)

        repo = current_domain.repository_for(Order)
        order = repo.require(command.order_id)

        if payment is not None:
            order.record_payment(payment)
        if command.status is not None:
            previous = order.status
            order.advance_to(command.status)
            logger.info("Order status changed", order_id=str(order.id), previous=previous, status=order.status)

        repo.add(order)
        return str(order.id)
