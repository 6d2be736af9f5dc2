"""Rotas de ordens de serviço."""

from api.routes.orders.notify import router

__all__ = ["router"]
