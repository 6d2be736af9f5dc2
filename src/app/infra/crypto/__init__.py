"""Primitivas criptográficas usadas na autenticação do webhook."""

from app.infra.crypto.constant_time import constant_time_equals

__all__ = ["constant_time_equals"]
