from ._errors import CoerceException, ConfigurationError, IllegalNameError, TypeLoadError, HelperExistsError, HintExistsError, UnknownHintError
from ._config import CoerceConfig
from ._names import is_type_name, load_type, qualified_name
from ._capabilities import converts_to, converts_from
from ._resolver import Resolver, Push, Pull, External
from ._coercer import Coercer, coerce, can_coerce, from_, coercer_for, install, coercible, get_default_coercer, reset_default_coercer
from ._logging import configure_logging

__version__ = "0.1.0"
