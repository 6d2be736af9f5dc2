"""Use cases das ações do webhook da oficina."""

from .create_order import CreateOrderUseCase, split_car_description
from .dispatcher import ActionOutcome, WebhookActionDispatcher
from .errors import ActionError, OrderNotFoundError
from .order_updates import RegisterPhotoUseCase, UpdateStatusUseCase
from .query_order import QueryOrderUseCase

__all__ = [
    "ActionError",
    "ActionOutcome",
    "CreateOrderUseCase",
    "OrderNotFoundError",
    "QueryOrderUseCase",
    "RegisterPhotoUseCase",
    "UpdateStatusUseCase",
    "WebhookActionDispatcher",
    "split_car_description",
]
