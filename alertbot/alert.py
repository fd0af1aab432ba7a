from dataclasses import dataclass
from typing import Any, Dict

from .utils import fold_keys, pick_first_nonempty


class AlertPayloadError(ValueError):
    """Documento de alerta que não pode ser decodificado."""


# campo JSON -> atributo do Alert (nomes casados sem diferenciar caixa)
STRING_FIELDS = {
    "Team": "team",
    "alerttype": "type",
    "Host": "host",
    "Message": "message",
    "severity": "raw_severity",
    "time": "raw_timestamp",
    "program": "raw_program",
    "syslog_severity": "syslog_severity",
    "syslog_timestamp": "syslog_timestamp",
    "syslog_program": "syslog_program",
}
HITS_FIELD = "num_hits"


@dataclass(frozen=True)
class Alert:
    team: str = ""
    type: str = ""
    host: str = ""
    message: str = ""
    hits: int = 0

    # severity/time/program podem chegar com nome atual ou legado (syslog_*)
    raw_severity: str = ""
    raw_timestamp: str = ""
    raw_program: str = ""
    syslog_severity: str = ""
    syslog_timestamp: str = ""
    syslog_program: str = ""

    @property
    def severity(self) -> str:
        return pick_first_nonempty(self.raw_severity, self.syslog_severity)

    @property
    def timestamp(self) -> str:
        return pick_first_nonempty(self.raw_timestamp, self.syslog_timestamp)

    @property
    def program(self) -> str:
        return pick_first_nonempty(self.raw_program, self.syslog_program)


def _coerce_hits(value: Any) -> int:
    if value is None:
        return 0
    # bool é subclasse de int, mas não é um contador válido
    if isinstance(value, bool):
        raise AlertPayloadError(f"'{HITS_FIELD}' deve ser inteiro, recebido: {value!r}")
    if not isinstance(value, int):
        raise AlertPayloadError(f"'{HITS_FIELD}' deve ser inteiro, recebido: {value!r}")
    if value < 0:
        raise AlertPayloadError(f"'{HITS_FIELD}' não pode ser negativo: {value}")
    return value


def parse_alert(payload: Dict[str, Any]) -> Alert:
    """Constrói um Alert imutável a partir do JSON decodificado.

    Nomes de campo são casados sem diferenciar maiúsculas/minúsculas.
    Campos desconhecidos são ignorados; campos ausentes ou null assumem
    string vazia (ou zero para num_hits). Tipos incompatíveis geram
    AlertPayloadError.
    """
    if not isinstance(payload, dict):
        raise AlertPayloadError(f"esperado objeto JSON, recebido: {type(payload).__name__}")

    fields = fold_keys(payload)
    kwargs: Dict[str, Any] = {}
    for field, attr in STRING_FIELDS.items():
        value = fields.get(field.lower())
        if value is None:
            continue
        if not isinstance(value, str):
            raise AlertPayloadError(f"'{field}' deve ser string, recebido: {value!r}")
        kwargs[attr] = value

    kwargs["hits"] = _coerce_hits(fields.get(HITS_FIELD))
    return Alert(**kwargs)
