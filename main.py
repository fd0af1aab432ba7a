import logging
import sys

from alertbot.constants import APP_PORT, DEBUG_MODE, SUBSCRIPTIONS_PATH
from alertbot.controller import create_app
from alertbot.services import build_sender
from alertbot.subscriptions import load_subscriptions
from alertbot.utils import configure_logging

logger = logging.getLogger("alertbot")


def main():
    configure_logging(DEBUG_MODE)
    try:
        subscriptions = load_subscriptions(SUBSCRIPTIONS_PATH)
        sender = build_sender()
    except ValueError as exc:
        logger.error(f"Não foi possível iniciar: {exc}")
        return 1

    app = create_app(subscriptions=subscriptions, sender=sender)
    app.run(host='0.0.0.0', port=APP_PORT, debug=DEBUG_MODE, use_reloader=False)
    return 0


if __name__ == '__main__':
    sys.exit(main())
