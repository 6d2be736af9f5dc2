"""API: camada de borda.

Responsabilidades:
- Receber as chamadas do n8n e da interface web
- Autenticar, limitar e validar payloads
- Repassar resultados ao n8n

Subpastas:
- connectors/: autenticação, leitura do corpo e cliente do relay
- validators/: validação e sanitização dos payloads das ações
- routes/: endpoints HTTP (webhook, orders, health)

NÃO PODE conter: regras de negócio das ações nem acesso direto aos stores.
"""
