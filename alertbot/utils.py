import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def pick_first_nonempty(*candidates):
    """Retorna o primeiro valor não vazio, na ordem de preferência.

    Não há validação de conteúdo: espaços contam como valor. Se nenhum
    candidato estiver preenchido, retorna string vazia.
    """
    for c in candidates:
        if c:
            return c
    return ""


def configure_logging(debug_mode=False):
    level = logging.DEBUG if debug_mode else logging.INFO
    root = logging.getLogger()
    # Evita handlers duplicados quando create_app é chamado mais de uma vez
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


def fold_keys(data):
    """Visão do dict com chaves em minúsculas, para casar campos sem diferenciar caixa.

    Chaves que diferem só na caixa: vale a última, na ordem do documento.
    """
    return {str(k).lower(): v for k, v in data.items()}
