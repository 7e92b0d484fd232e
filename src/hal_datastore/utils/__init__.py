from .identifiers import generate_local_identifier  # noqa
from .typing import assert_not_none, is_mapping  # noqa
