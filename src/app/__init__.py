"""App: coração do sistema: casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: ações do webhook (criar_os, atualizar_status, ...)
- services/: rate limit, auditoria e mascaramento
- infra/: implementações concretas de IO (stores, crypto)
- protocols/: contratos/interfaces
- domain/: registros da oficina e comandos
- observability/: correlation_id dos logs
- constants/: enums de domínio

Padrão: app executa; api adapta; utils apoia.
"""
