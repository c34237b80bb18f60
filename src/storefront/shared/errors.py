"""Error taxonomy for storefront operations.

Built on Protean's exceptions so that anything raised inside a command handler
aborts the surrounding Unit of Work. All errors carry ``messages`` as a
``{field: [reason, ...]}`` dict; :func:`error_message` pulls out the first reason,
which is what the HTTP layer returns verbatim.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class NotFound(ObjectNotFoundError):
    """A referenced customer, product, category or order does not exist."""

    def __init__(self, messages, **kwargs):
        super().__init__(messages, **kwargs)
        # ObjectNotFoundError only keeps ``args``
        self.messages = messages


class CustomerNotFound(NotFound):
    pass


class ProductNotFound(NotFound):
    pass


class CategoryNotFound(NotFound):
    pass


class OrderNotFound(NotFound):
    pass


class CartNotFound(NotFound):
    pass


class BusinessRuleViolation(ValidationError):
    """A business rule rejected the operation. Never retried."""


class InvalidStatusTransition(BusinessRuleViolation):
    pass


class InsufficientStock(BusinessRuleViolation):
    pass


class UniquenessConflict(ValidationError):
    """A unique field (customer email, product name, category name) is already taken."""


class MalformedInput(ValidationError):
    """The caller sent something unusable before any transaction started."""


def error_message(exc: Exception) -> str:
    """Return the first human-readable reason carried by ``exc``."""
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    if isinstance(messages, dict):
        for reasons in messages.values():
            if isinstance(reasons, (list, tuple)) and reasons:
                return str(reasons[0])
            if reasons:
                return str(reasons)
    elif isinstance(messages, (list, tuple)) and messages:
        return str(messages[0])
    elif messages:
        return str(messages)
    return exc.__class__.__name__
