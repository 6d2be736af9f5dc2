"""Rotas do webhook de automação."""

from api.routes.webhook.router import router

__all__ = ["router"]
