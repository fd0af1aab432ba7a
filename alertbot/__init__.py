"""Relay de alertas (webhook JSON) -> chat, com menção de assinantes.

Este pacote contém:
- constants: variáveis de ambiente e constantes
- utils: helpers (fallback de campos, logging)
- alert: modelo imutável do alerta e decodificação do JSON
- subscriptions: tabela de assinaturas e resolução de quem mencionar
- formatters: formatação da mensagem de chat
- services: integração com o chat (Keybase, webhook)
- controller: criação do Flask app e endpoints
"""
