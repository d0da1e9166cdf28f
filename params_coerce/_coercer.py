"""
Coercer - turns parameters into instances of the classes an API expects.
"""
import importlib
from collections.abc import MutableMapping
from typing import Any, Callable, Optional

import structlog

from ._config import CoerceConfig
from ._errors import ConfigurationError, HelperExistsError, IllegalNameError, TypeLoadError, UnknownHintError
from ._names import TypeSpec, is_identifier, qualified_name, resolve_type
from ._resolver import External, Pull, Push, Resolver

logger = structlog.get_logger(__name__)

SCALAR_TYPES = (str, bytes, int, float, complex, bool)

#region: Coercer Class

class Coercer:
    """
    Coerces values into instances of a target class using the conversions
    found by a Resolver.

    A value that cannot be coerced gives None rather than an exception, so
    callers can try another type or report the problem in their own terms.
    """

    def __init__(self, resolver: Optional[Resolver] = None, config: Optional[CoerceConfig] = None):
        if resolver is None:
            resolver = Resolver(config)
        elif config is not None and config != resolver.config:
            raise ConfigurationError(
                f"Coercer config {config!r} differs from its resolver's {resolver.config!r}"
            )
        self.resolver = resolver
        self.config = resolver.config

    def coerce(self, target: TypeSpec, value: Any) -> Any:
        """
        Coerce value into an instance of target (a class or a type name),
        or one of its subclasses.

        Args:
            target: The class wanted, or its dotted name. The defining module
                is imported if needed.
            value: Anything

        Returns:
            An instance of target, or None if value cannot be coerced.

        Raises:
            IllegalNameError: target is not a class nor a valid type name
            TypeLoadError: target's module cannot be loaded
        """
        return self._coerce(resolve_type(target), value)

    def can_coerce(self, target: TypeSpec, value: Any) -> bool:
        """Check whether value coerces into target. The conversion does run."""
        return self.coerce(target, value) is not None

    def from_(self, cls: type, value: Any) -> Any:
        """Method form of coerce(), meant to be bound to the target class."""
        if not isinstance(cls, type):
            raise ConfigurationError("'from_' must be called as a classmethod with a single param")
        return self._coerce(cls, value)

    def coercer_for(self, target: TypeSpec, name: Optional[str] = None) -> Callable[..., Any]:
        """
        Build a helper bound to target.

        The helper coerces its *last* positional argument, so it reads the
        same called as a function, ``to_uri(x)``, or as a method, ``self.to_uri(x)``.
        """
        return _helper(lambda: self, target, name)

    def install(self, namespace: Any, *params: Any) -> Any:
        """
        Put coercion helpers in a namespace (a dict such as globals(), a class or a module).

            install(ns, 'coerce')        -> ns.coerce(target, value)
            install(ns, 'from')          -> ns.from_(value), a classmethod
            install(ns, 'to_uri', 'URI') -> ns.to_uri(value)

        The 'from' form needs a class, or the namespace of a class body
        (``install(locals(), 'from')`` inside the class statement).

        Returns the installed object, or None when called without params.

        Raises:
            ConfigurationError: bad params, or 'from' outside a class
            HelperExistsError: the name is already defined in namespace
        """
        return _install(lambda: self, namespace, params)

    def _coerce(self, cls: type, value: Any) -> Any:
        # cls is a class at this point
        if value is None:
            return None
        if not self.config.scalars and isinstance(value, SCALAR_TYPES):
            return None

        # In the simplest case it is already what we need
        if isinstance(value, cls):
            return value

        hint = self.resolver.resolve(type(value), cls)
        if hint is None:
            self._miss("coercion_miss", value, cls)
            return None

        result = self._apply(hint, cls, value)

        if not isinstance(result, cls):
            self._miss("coercion_rejected_result", value, cls, result=type(result).__qualname__, hint=repr(hint))
            return None
        return result

    @staticmethod
    def _apply(hint: Any, cls: type, value: Any) -> Any:
        if isinstance(hint, Push):
            return getattr(value, hint.method)()
        if isinstance(hint, Pull):
            return getattr(cls, hint.method)(value)
        if isinstance(hint, External):
            try:
                function = importlib.import_module(hint.module)
                for attr in hint.function.split("."):
                    function = getattr(function, attr)
            except (ImportError, AttributeError) as e:
                raise TypeLoadError(f"Cannot load conversion {hint.module}:{hint.function}: {e}") from e
            return function(value)
        raise UnknownHintError(f"Unknown coercion hint {hint!r}")

    def _miss(self, event: str, value: Any, cls: type, **context: Any) -> None:
        if self.config.log_misses:
            logger.debug(event, source=qualified_name(type(value)), target=qualified_name(cls), **context)

#endregion

#region: Helpers

# Helpers take a zero-argument callable returning the coercer to use, and
# call it on every use: helpers made through the module level functions
# follow get_default_coercer() even after reset_default_coercer().
CoercerSource = Callable[[], Coercer]

def _helper(current: CoercerSource, target: TypeSpec, name: Optional[str] = None) -> Callable[..., Any]:
    if name is not None and not is_identifier(name):
        raise IllegalNameError(f"Illegal method name {name!r}")
    cls = resolve_type(target)

    def helper(*args):
        if not args:
            raise TypeError(f"{helper.__name__}() takes the value to coerce")
        return current()._coerce(cls, args[-1])

    helper.__name__ = name or f"to_{cls.__name__}"
    helper.__qualname__ = helper.__name__
    helper.__doc__ = f"Coerce the last argument into {qualified_name(cls)}, or return None."
    return helper


def _coerce_function(current: CoercerSource) -> Callable[[TypeSpec, Any], Any]:
    def coerce(target, value):
        return current().coerce(target, value)

    coerce.__doc__ = Coercer.coerce.__doc__
    return coerce


def _from_function(current: CoercerSource) -> Callable[[type, Any], Any]:
    def from_(cls, value):
        return current().from_(cls, value)

    from_.__doc__ = "Coerce value into an instance of the class, or return None."
    return from_


def _install(current: CoercerSource, namespace: Any, params: tuple) -> Any:
    if not params:
        return None
    if len(params) > 2:
        raise ConfigurationError("Too many parameters")

    if len(params) == 1:
        if params[0] == "coerce":
            name, obj = "coerce", _coerce_function(current)
        elif params[0] == "from":
            if not _is_class_namespace(namespace):
                raise ConfigurationError(
                    f"'from' installs a classmethod, {_describe(namespace)} is not a class"
                )
            name, obj = "from_", classmethod(_from_function(current))
        else:
            raise ConfigurationError(f"params_coerce does not export {params[0]!r}")
    else:
        name, target = params
        if not is_identifier(name):
            raise IllegalNameError(f"Illegal method name {name!r}")
        # validate before touching the namespace
        obj = _helper(current, target, name)

    if _defines(namespace, name):
        raise HelperExistsError(f"Cannot create {_describe(namespace)}.{name}. It already exists")
    _define(namespace, name, obj)
    return obj

#endregion

#region: Namespaces

def _is_class_namespace(namespace: Any) -> bool:
    if isinstance(namespace, type):
        return True
    # a class body's locals() holds __qualname__, a module's globals() does not
    return isinstance(namespace, MutableMapping) and "__qualname__" in namespace


def _defines(namespace: Any, name: str) -> bool:
    if isinstance(namespace, MutableMapping):
        return name in namespace
    # only the namespace's own attributes count, not inherited ones
    return name in getattr(namespace, "__dict__", {})


def _define(namespace: Any, name: str, obj: Any) -> None:
    if isinstance(namespace, MutableMapping):
        namespace[name] = obj
    else:
        setattr(namespace, name, obj)


def _describe(namespace: Any) -> str:
    if isinstance(namespace, MutableMapping):
        return namespace.get("__qualname__") or namespace.get("__name__") or "namespace"
    return getattr(namespace, "__qualname__", None) or getattr(namespace, "__name__", repr(namespace))

#endregion

#region: Public API

_default_coercer = None

def get_default_coercer() -> Coercer:
    """
    Process-wide coercer (lazily created) behind the module level functions.
    Applications wanting their own cache build a Coercer instead.
    """
    global _default_coercer
    if _default_coercer is None:
        _default_coercer = Coercer()
    return _default_coercer

def reset_default_coercer():
    """
    Drop the process-wide coercer, and with it every cached resolution.
    Helpers made by the module level functions move on to the new one.
    Useful for tests.
    """
    global _default_coercer
    _default_coercer = None

def coerce(target: TypeSpec, value: Any) -> Any:
    """
    Coerce a value into an instance of target, or one of its subclasses.

    Examples:
        >>> from params_coerce import coerce
        >>> vector = coerce('geometry.Vector', point)
        >>> coerce('geometry.Circle', point) is None
        True
    """
    return get_default_coercer().coerce(target, value)

def can_coerce(target: TypeSpec, value: Any) -> bool:
    return get_default_coercer().can_coerce(target, value)

def from_(cls: type, value: Any) -> Any:
    return get_default_coercer().from_(cls, value)

def coercer_for(target: TypeSpec, name: Optional[str] = None) -> Callable[..., Any]:
    return _helper(get_default_coercer, target, name)

def install(namespace: Any, *params: Any) -> Any:
    return _install(get_default_coercer, namespace, params)

def coercible(cls: type) -> type:
    """
    Class decorator giving cls a ``from_`` classmethod.

        @coercible
        class URI:
            ...

        uri = URI.from_(location)
    """
    install(cls, "from")
    return cls

#endregion
