"""
Type names: validation, qualified names and on-demand loading.

A type name is a dotted identifier made of a module path followed by the
qualified name of a class, e.g. ``geometry.shapes.Point`` or
``geometry.shapes.Outer.Inner``. A name without any dot is looked up in
``builtins``.
"""
import builtins
import importlib
import keyword
import sys
from typing import Any, Optional, Union

import structlog

from ._errors import IllegalNameError, TypeLoadError

logger = structlog.get_logger(__name__)

TypeSpec = Union[type, str]


def is_identifier(name: Any) -> bool:
    return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)


def is_type_name(name: Any) -> bool:
    """True if name is a syntactically valid dotted identifier."""
    return isinstance(name, str) and all(is_identifier(part) for part in name.split("."))


def check_type_name(name: Any) -> str:
    if not is_type_name(name):
        raise IllegalNameError(f"Illegal class name {name!r}")
    return name


def qualified_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _normalize(name: str) -> str:
    if name.startswith("builtins."):
        return name[len("builtins."):]
    return name


def names_type(declared: TypeSpec, cls: type) -> bool:
    """
    Does a declared type (a class or a type name) designate cls?
    Names are compared as written, no module gets loaded.
    """
    if isinstance(declared, type):
        return declared is cls
    return _normalize(declared) == qualified_name(cls)


def _lookup(obj: Any, attrs) -> Any:
    for attr in attrs:
        obj = getattr(obj, attr)
    return obj


def _import(module: str):
    fresh = module not in sys.modules
    mod = importlib.import_module(module)
    if fresh:
        logger.debug("module_loaded", module=module)
    return mod


def load_type(name: str) -> type:
    """
    Return the class called `name`, importing its module if needed.

    The longest importable module prefix wins, so nested classes
    (``pkg.mod.Outer.Inner``) resolve as expected.

    Raises:
        IllegalNameError: name is not a dotted identifier
        TypeLoadError: the module or the attribute cannot be found, the
            module raised while importing, or the object is not a class
    """
    parts = check_type_name(name).split(".")

    if len(parts) == 1:
        try:
            obj = getattr(builtins, parts[0])
        except AttributeError:
            raise TypeLoadError(f"Cannot load class {name!r}: no such builtin") from None
    else:
        obj = None
        error: Optional[BaseException] = None
        for i in range(len(parts) - 1, 0, -1):
            module = ".".join(parts[:i])
            try:
                mod = _import(module)
            except ModuleNotFoundError as e:
                # only a missing module on our own path means "try a shorter prefix"
                if e.name and (module == e.name or module.startswith(e.name + ".")):
                    error = e
                    continue
                raise TypeLoadError(f"Cannot load class {name!r}: {e}") from e
            except Exception as e:
                raise TypeLoadError(f"Cannot load class {name!r}: {e}") from e
            try:
                obj = _lookup(mod, parts[i:])
            except AttributeError as e:
                raise TypeLoadError(f"Cannot load class {name!r}: {e}") from e
            break
        else:
            raise TypeLoadError(f"Cannot load class {name!r}: {error}") from error

    if not isinstance(obj, type):
        raise TypeLoadError(f"{name!r} does not name a class")
    return obj


def loaded_type(name: str) -> type:
    """Like load_type(), but never imports: the module must already be loaded."""
    parts = check_type_name(name).split(".")
    candidates = [(builtins, parts)] if len(parts) == 1 else [
        (sys.modules.get(".".join(parts[:i])), parts[i:]) for i in range(len(parts) - 1, 0, -1)
    ]
    for mod, attrs in candidates:
        if mod is None:
            continue
        try:
            obj = _lookup(mod, attrs)
        except AttributeError:
            continue
        if isinstance(obj, type):
            return obj
    raise TypeLoadError(f"Class {name!r} is not loaded")


def resolve_type(target: Any, load: bool = True) -> type:
    """Accept a class or a type name and return the class."""
    if isinstance(target, type):
        return target
    if isinstance(target, str):
        return load_type(target) if load else loaded_type(target)
    raise IllegalNameError(f"Illegal class name {target!r}")
