from .config import ModelOptions, NetworkConfig, RequestOptions  # noqa
from .datastore import Datastore  # noqa
from .deferred import Deferred  # noqa
from .document import HalDocument  # noqa
from .includes import IncludeResolver, filter_redundant_includes  # noqa
from .interfaces import Response, Transport  # noqa
from .model import HalModel  # noqa
from .properties import Attribute, HasMany, HasOne, PropertyKind, register_properties  # noqa
from .service import ModelService  # noqa
from .storage import HalStorage  # noqa
