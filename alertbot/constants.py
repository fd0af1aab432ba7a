import os

# Configurações globais de ambiente
APP_PORT = int(os.getenv("APP_PORT", "8080"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Canal (topic) onde os alertas são publicados, por time
ALERT_CHANNEL = os.getenv("ALERT_CHANNEL", "alerts")

# Arquivo JSON de assinaturas: { "programa": {"All": [...], "Critical": [...]} }
SUBSCRIPTIONS_PATH = os.getenv("SUBSCRIPTIONS_PATH", "").strip()

# Transporte de chat: 'keybase' | 'webhook'
CHAT_TRANSPORT = os.getenv("CHAT_TRANSPORT", "keybase").strip().lower()

# Integração com Keybase (chat api via CLI)
KEYBASE_LOCATION = os.getenv("KEYBASE_LOCATION", "keybase")
KEYBASE_TIMEOUT_SECONDS = int(os.getenv("KEYBASE_TIMEOUT_SECONDS", "10"))

# Integração via webhook HTTP genérico
CHAT_WEBHOOK_URL = os.getenv("CHAT_WEBHOOK_URL")
CHAT_WEBHOOK_TIMEOUT_SECONDS = int(os.getenv("CHAT_WEBHOOK_TIMEOUT_SECONDS", "5"))
CHAT_WEBHOOK_VERIFY_TLS = os.getenv("CHAT_WEBHOOK_VERIFY_TLS", "true").lower() == "true"

# Nível de severidade que aciona a lista "Critical" das assinaturas
CRITICAL_TIER = "critical"
MENTION_PREFIX = "@"
