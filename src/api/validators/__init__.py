"""Validators de payloads recebidos pela API.

Estrutura:
- webhook/: ações do webhook de automação (criar_os, atualizar_status,
  registrar_foto, consultar_os)
"""

__all__: list[str] = []
