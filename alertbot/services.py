import json
import logging
import subprocess

import requests
import urllib3

from .constants import (
    CHAT_TRANSPORT,
    CHAT_WEBHOOK_TIMEOUT_SECONDS,
    CHAT_WEBHOOK_URL,
    CHAT_WEBHOOK_VERIFY_TLS,
    KEYBASE_LOCATION,
    KEYBASE_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class ChatDeliveryError(RuntimeError):
    """Falha ao entregar a mensagem no chat."""


class KeybaseSender:
    """Envia mensagens pela chat api do Keybase (`keybase chat api -m <json>`)."""

    def __init__(self, keybase_location: str = KEYBASE_LOCATION, timeout: int = KEYBASE_TIMEOUT_SECONDS):
        self.keybase_location = keybase_location
        self.timeout = timeout

    def _build_request(self, team: str, channel: str, text: str) -> dict:
        return {
            "method": "send",
            "params": {
                "options": {
                    "channel": {
                        "name": team,
                        "members_type": "team",
                        "topic_name": channel,
                    },
                    "message": {"body": text},
                },
            },
        }

    def send(self, team: str, channel: str, text: str) -> dict:
        cmd = [self.keybase_location, "chat", "api", "-m", json.dumps(self._build_request(team, channel, text))]
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError as exc:
            raise ChatDeliveryError(f"comando keybase não encontrado: {self.keybase_location}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ChatDeliveryError(f"timeout ({self.timeout}s) aguardando keybase chat api") from exc

        if proc.returncode != 0:
            raise ChatDeliveryError(
                f"keybase chat api saiu com código {proc.returncode}: {(proc.stderr or '').strip()}"
            )

        try:
            reply = json.loads(proc.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise ChatDeliveryError(f"resposta inválida da keybase chat api: {proc.stdout!r}") from exc

        if not isinstance(reply, dict):
            raise ChatDeliveryError(f"resposta inesperada da keybase chat api: {proc.stdout!r}")

        if reply.get("error"):
            error = reply["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise ChatDeliveryError(f"keybase chat api retornou erro: {message}")
        return reply.get("result") or {}


class WebhookSender:
    """Envia mensagens para um webhook HTTP (JSON com team/channel/text)."""

    def __init__(self, url=CHAT_WEBHOOK_URL, timeout: int = CHAT_WEBHOOK_TIMEOUT_SECONDS,
                 verify_tls: bool = CHAT_WEBHOOK_VERIFY_TLS):
        if not url:
            raise ValueError("CHAT_WEBHOOK_URL não configurado para o transporte 'webhook'")
        self.url = url
        self.timeout = timeout
        self.verify_tls = verify_tls

        # Suprime avisos de HTTPS inseguro quando a verificação TLS está desativada
        if not self.verify_tls:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def send(self, team: str, channel: str, text: str) -> dict:
        payload = {"team": team, "channel": channel, "text": text}
        try:
            resp = requests.post(self.url, json=payload, timeout=self.timeout, verify=self.verify_tls)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise ChatDeliveryError(f"falha ao enviar para o webhook: {exc}") from exc
        logger.debug(f"Webhook response: {resp.status_code}")
        return {"status_code": resp.status_code}


def build_sender(transport: str = CHAT_TRANSPORT):
    if transport == "keybase":
        return KeybaseSender(KEYBASE_LOCATION, KEYBASE_TIMEOUT_SECONDS)
    if transport == "webhook":
        return WebhookSender(CHAT_WEBHOOK_URL, CHAT_WEBHOOK_TIMEOUT_SECONDS, CHAT_WEBHOOK_VERIFY_TLS)
    raise ValueError(f"CHAT_TRANSPORT desconhecido: {transport!r} (use 'keybase' ou 'webhook')")


def send_chat_message(sender, team: str, channel: str, text: str):
    logger.debug(f"Enviando alerta para team={team!r} channel={channel!r} ({len(text)} chars)")
    return sender.send(team, channel, text)
