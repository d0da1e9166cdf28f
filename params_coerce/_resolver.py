"""
Resolution of conversion paths between two types, with memoization.
"""
import threading
from contextlib import nullcontext
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

import structlog

from ._capabilities import find_pull, find_push
from ._config import CoerceConfig
from ._errors import HintExistsError, IllegalNameError
from ._names import TypeSpec, check_type_name, is_identifier, qualified_name, resolve_type

logger = structlog.get_logger(__name__)

#region: Hints

@dataclass(frozen=True)
class Push:
    """Call `method` on the value; it returns the target."""
    method: str

@dataclass(frozen=True)
class Pull:
    """Call `method` on the target class with the value."""
    method: str

@dataclass(frozen=True)
class External:
    """Import `module` and call its `function` with the value."""
    module: str
    function: str

    @classmethod
    def parse(cls, ref: str) -> "External":
        """Parse a ``"package.module:function"`` reference."""
        module, sep, function = ref.partition(":") if isinstance(ref, str) else ("", "", "")
        if not sep or not all(is_identifier(part) for part in function.split(".")):
            raise IllegalNameError(f"Illegal function reference {ref!r}, expected 'module:function'")
        return cls(check_type_name(module), function)

Hint = Union[Push, Pull, External]
ResolutionKey = Tuple[type, type]

#endregion

#region: Resolver

class Resolver:
    """
    Works out how values of one type can be turned into another type.

    Push conversions (declared on the source type) are preferred over pull
    conversions (declared on the target type). Every outcome, including
    "no conversion", is cached for the lifetime of the resolver and never
    revised: a conversion added to a class after a failed lookup is not seen.
    """

    def __init__(self, config: Optional[CoerceConfig] = None):
        self.config = config or CoerceConfig()
        self._hints: Dict[ResolutionKey, Optional[Hint]] = {}
        self._lock = threading.Lock() if self.config.thread_safe else nullcontext()
        self.probe_count = 0

    @property
    def hints(self) -> Mapping[ResolutionKey, Optional[Hint]]:
        return MappingProxyType(self._hints)

    def resolve(self, source: TypeSpec, target: TypeSpec) -> Optional[Hint]:
        """
        Return the hint for converting `source` instances into `target`,
        or None if there is no way to do it.

        Both types must already be loaded; type names are only validated
        and looked up, loading modules is the coercer's job.
        """
        key = (self._type(source), self._type(target))

        with self._lock:
            if key in self._hints:
                return self._hints[key]

        hint = self._probe(*key)

        with self._lock:
            # a concurrent probe of the same pair may have won
            hint = self._hints.setdefault(key, hint)

        logger.debug(
            "coercion_resolved",
            source=qualified_name(key[0]),
            target=qualified_name(key[1]),
            hint=repr(hint),
        )
        return hint

    def register(self, source: TypeSpec, target: TypeSpec, ref: str) -> External:
        """
        Record that `ref` (``"module:function"``) converts source instances
        into target instances. The pair must not have been resolved yet.
        """
        key = (self._type(source), self._type(target))
        hint = External.parse(ref)
        with self._lock:
            if key in self._hints:
                raise HintExistsError(
                    f"Conversion from {qualified_name(key[0])} to {qualified_name(key[1])} "
                    f"is already resolved as {self._hints[key]!r}"
                )
            self._hints[key] = hint
        return hint

    def _probe(self, source: type, target: type) -> Optional[Hint]:
        self.probe_count += 1

        method = find_push(source, target)
        if method is not None:
            return Push(method)

        method = find_pull(target, source)
        if method is not None:
            return Pull(method)

        return None

    @staticmethod
    def _type(spec: TypeSpec) -> type:
        return resolve_type(spec, load=False)

#endregion
