"""
Conversion capabilities declared by classes.

A class that knows how to turn itself into another type marks a method with
``@converts_to``; a class that knows how to build itself from another type
marks a classmethod with ``@converts_from``::

    class Point:
        @converts_to("geometry.Vector")
        def as_vector(self):
            return Vector(self.x, self.y)

    class Line:
        @converts_from(Point)
        def through_origin(cls, point):
            return cls(Point(0, 0), point)

Types may be given as classes or as type names, so the declaring module
does not have to import the other side.
"""
import inspect
from typing import Iterator, Optional, Tuple

from ._names import TypeSpec, check_type_name, names_type

PUSH_MARKER = "__coerce_to__"
PULL_MARKER = "__coerce_from__"


def _check_declared(declared: TypeSpec) -> TypeSpec:
    if isinstance(declared, type):
        return declared
    return check_type_name(declared)


def _mark(func, marker: str, declared: TypeSpec) -> None:
    setattr(func, marker, getattr(func, marker, ()) + (declared,))


def converts_to(target: TypeSpec):
    """Declare a method returning an instance of `target` (push conversion)."""
    target = _check_declared(target)

    def decorator(method):
        _mark(method, PUSH_MARKER, target)
        return method

    return decorator


def converts_from(source: TypeSpec):
    """
    Declare a classmethod building an instance from a `source` value (pull conversion).
    Plain functions are turned into classmethods.
    """
    source = _check_declared(source)

    def decorator(method):
        if isinstance(method, (classmethod, staticmethod)):
            _mark(method.__func__, PULL_MARKER, source)
            return method
        _mark(method, PULL_MARKER, source)
        return classmethod(method)

    return decorator


def _unwrap(attr):
    if isinstance(attr, (classmethod, staticmethod)):
        return attr.__func__
    return attr


def declared_conversions(cls: type, marker: str) -> Iterator[Tuple[str, TypeSpec]]:
    """
    Yield (method name, declared type) pairs along the MRO of cls.
    A name defined in a subclass hides the declarations of its bases.
    """
    seen = set()
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            func = _unwrap(attr)
            if inspect.isfunction(func):
                yield from ((name, declared) for declared in vars(func).get(marker, ()))


def find_push(source: type, target: type) -> Optional[str]:
    for name, declared in declared_conversions(source, PUSH_MARKER):
        if names_type(declared, target):
            return name
    return None


def find_pull(target: type, source: type) -> Optional[str]:
    # most derived base of the source first
    pulls = list(declared_conversions(target, PULL_MARKER))
    for base in source.__mro__:
        for name, declared in pulls:
            if names_type(declared, base):
                return name
    return None
