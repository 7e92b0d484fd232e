import uuid


def generate_local_identifier(prefix: str) -> str:
    """
    Returns a process-unique placeholder identifier for entities that
    have no self link (yet).

    :param str prefix: the identifier prefix, e.g. ``local-model``.
    """
    return f"{prefix}-{uuid.uuid4().hex}"
