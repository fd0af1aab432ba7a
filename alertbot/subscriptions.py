import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from .alert import Alert
from .constants import CRITICAL_TIER
from .utils import fold_keys

logger = logging.getLogger(__name__)


class SubscriptionConfigError(ValueError):
    """Arquivo/estrutura de assinaturas inválido."""


@dataclass(frozen=True)
class Subscription:
    all: Tuple[str, ...] = ()
    critical: Tuple[str, ...] = ()


EMPTY_SUBSCRIPTIONS: Mapping[str, Subscription] = MappingProxyType({})


def _parse_usernames(program: str, key: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(u, str) for u in value):
        raise SubscriptionConfigError(
            f"Assinatura '{program}': '{key}' deve ser uma lista de usernames, recebido: {value!r}"
        )
    # Mantém ordem e duplicatas como estão no arquivo
    return tuple(value)


def parse_subscriptions(data: Any) -> Mapping[str, Subscription]:
    if not isinstance(data, dict):
        raise SubscriptionConfigError(
            f"Assinaturas devem ser um objeto JSON, recebido: {type(data).__name__}"
        )

    table = {}
    for program, value in data.items():
        if not isinstance(value, dict):
            raise SubscriptionConfigError(
                f"Assinatura '{program}' deve ser um objeto com 'All'/'Critical', recebido: {value!r}"
            )
        fields = fold_keys(value)
        table[program] = Subscription(
            all=_parse_usernames(program, "All", fields.get("all")),
            critical=_parse_usernames(program, "Critical", fields.get("critical")),
        )
    return MappingProxyType(table)


def load_subscriptions(file_path: Optional[str]) -> Mapping[str, Subscription]:
    """Carrega a tabela de assinaturas do disco (uma vez, na inicialização).

    Sem caminho configurado, retorna tabela vazia. Falhas de leitura ou de
    JSON são fatais: o processo não deve subir com assinaturas erradas.
    """
    if not file_path:
        logger.info("SUBSCRIPTIONS_PATH não configurado, nenhum assinante será mencionado")
        return EMPTY_SUBSCRIPTIONS

    try:
        with open(file_path, 'r', encoding='utf-8') as fp:
            raw = fp.read()
    except OSError as exc:
        raise SubscriptionConfigError(f"Não foi possível ler o arquivo de assinaturas {file_path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SubscriptionConfigError(f"JSON de assinaturas inválido em {file_path}: {exc}") from exc

    table = parse_subscriptions(data)
    logger.info(f"Assinaturas carregadas: {len(table)} programas de {file_path}")
    return table


def resolve_subscribers(alert: Alert, subscriptions: Optional[Mapping[str, Subscription]]) -> List[str]:
    if subscriptions is None:
        return []

    subscription = subscriptions.get(alert.program)
    if subscription is None:
        return []

    subscribers: List[str] = []
    if alert.severity.lower() == CRITICAL_TIER:
        subscribers.extend(subscription.critical)
    subscribers.extend(subscription.all)
    return subscribers
