import logging

from flask import Flask, request
from werkzeug.exceptions import BadRequest

from .alert import AlertPayloadError, parse_alert
from .constants import ALERT_CHANNEL, DEBUG_MODE, SUBSCRIPTIONS_PATH
from .formatters import format_alert_message
from .services import ChatDeliveryError, build_sender, send_chat_message
from .subscriptions import load_subscriptions, resolve_subscribers
from .utils import configure_logging

logger = logging.getLogger(__name__)


def create_app(subscriptions=None, sender=None, channel=None):
    """Cria o Flask app.

    subscriptions/sender/channel podem ser injetados (testes); caso contrário
    vêm das variáveis de ambiente em constants.
    """
    configure_logging(DEBUG_MODE)

    app = Flask(__name__)
    # Tabela de assinaturas: carregada uma vez, somente leitura
    if subscriptions is None:
        subscriptions = load_subscriptions(SUBSCRIPTIONS_PATH)
    if sender is None:
        sender = build_sender()
    if channel is None:
        channel = ALERT_CHANNEL

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'alertbot', 'subscriptions': len(subscriptions)}, 200

    @app.route('/', methods=['POST'])
    @app.route('/alert', methods=['POST'])
    def alert():
        try:
            data = request.get_json(force=True)
            logger.debug(f"Received data: {data}")
            parsed = parse_alert(data)
        except (BadRequest, AlertPayloadError) as exc:
            logger.warning(f"Falha ao decodificar JSON do alerta: {exc}")
            return {'status': 'error', 'error': str(exc)}, 400

        subscribers = resolve_subscribers(parsed, subscriptions)
        text = format_alert_message(parsed, subscribers)

        try:
            send_chat_message(sender, parsed.team, channel, text)
        except ChatDeliveryError as exc:
            logger.error(f"Falha ao enviar mensagem para team={parsed.team!r}: {exc}")
            return {'status': 'error', 'error': str(exc)}, 502

        return {'status': 'sent', 'mentions': subscribers}, 200

    return app
