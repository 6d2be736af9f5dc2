"""Connectors: adapters de borda.

Estrutura:
- webhook/: leitura, autenticação e origem das chamadas do n8n
- n8n/: relay dos resultados para o webhook do n8n
"""

__all__: list[str] = []
