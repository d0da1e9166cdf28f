"""Tests for Resolver and the resolution hints."""

import threading

import pytest

from params_coerce import (
    CoerceConfig,
    Coercer,
    External,
    HintExistsError,
    IllegalNameError,
    Pull,
    Push,
    Resolver,
    TypeLoadError,
)
from tests.geometry import Bearing, Circle, Line, Point, Point3D, Polar, Vector


class TestResolve:
    def test_push(self, resolver: Resolver) -> None:
        assert resolver.resolve(Point, Vector) == Push("as_vector")

    def test_pull(self, resolver: Resolver) -> None:
        assert resolver.resolve(Point, Line) == Pull("through_origin")

    def test_none(self, resolver: Resolver) -> None:
        assert resolver.resolve(Point, Circle) is None

    def test_push_before_pull(self, resolver: Resolver) -> None:
        assert resolver.resolve(Polar, Bearing) == Push("as_bearing")

    def test_direction_matters(self, resolver: Resolver) -> None:
        assert resolver.resolve(Vector, Point) is None
        assert resolver.resolve(Point, Vector) == Push("as_vector")
        assert resolver.probe_count == 2

    def test_names_of_loaded_types(self, resolver: Resolver) -> None:
        assert resolver.resolve("tests.geometry.Point", "tests.geometry.Vector") == Push("as_vector")
        assert (Point, Vector) in resolver.hints

    def test_subclass_has_its_own_entry(self, resolver: Resolver) -> None:
        resolver.resolve(Point, Vector)
        resolver.resolve(Point3D, Vector)
        assert resolver.probe_count == 2


class TestCache:
    def test_hit_skips_lookup(self, resolver: Resolver) -> None:
        first = resolver.resolve(Point, Vector)
        second = resolver.resolve(Point, Vector)
        assert first is second
        assert resolver.probe_count == 1

    def test_negative_hit_skips_lookup(self, resolver: Resolver) -> None:
        for _ in range(3):
            assert resolver.resolve(Point, Circle) is None
        assert resolver.probe_count == 1

    def test_hints_are_read_only(self, resolver: Resolver) -> None:
        resolver.resolve(Point, Vector)
        with pytest.raises(TypeError):
            resolver.hints[(Point, Circle)] = Push("x")  # type: ignore[index]

    def test_resolvers_do_not_share_state(self) -> None:
        first, second = Resolver(), Resolver()
        first.resolve(Point, Vector)
        assert len(second.hints) == 0

    @pytest.mark.parametrize("thread_safe", [True, False])
    def test_concurrent_first_resolution(self, thread_safe: bool) -> None:
        resolver = Resolver(CoerceConfig(thread_safe=thread_safe))
        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(resolver.resolve(Point, Line))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == [Pull("through_origin")] * 8
        assert len(resolver.hints) == 1


class TestErrors:
    def test_malformed_name(self, resolver: Resolver) -> None:
        with pytest.raises(IllegalNameError):
            resolver.resolve(Point, "no good")
        assert len(resolver.hints) == 0

    def test_unloaded_type_is_not_imported(self, resolver: Resolver) -> None:
        import sys

        with pytest.raises(TypeLoadError):
            resolver.resolve(Point, "tests.never_imported.Thing")
        assert "tests.never_imported" not in sys.modules


class TestRegister:
    def test_external_conversion(self, resolver: Resolver) -> None:
        hint = resolver.register(Circle, Vector, "tests.geometry:vector_from_circle")
        assert hint == External("tests.geometry", "vector_from_circle")
        assert resolver.resolve(Circle, Vector) is hint
        assert resolver.probe_count == 0

        vector = Coercer(resolver).coerce(Vector, Circle(5))
        assert (vector.dx, vector.dy) == (5, 0)

    def test_cannot_replace_a_hint(self, resolver: Resolver) -> None:
        resolver.register(Circle, Vector, "tests.geometry:vector_from_circle")
        with pytest.raises(HintExistsError):
            resolver.register(Circle, Vector, "tests.geometry:vector_from_circle")

    def test_cannot_replace_a_negative_hint(self, resolver: Resolver) -> None:
        assert resolver.resolve(Circle, Vector) is None
        with pytest.raises(HintExistsError):
            resolver.register(Circle, Vector, "tests.geometry:vector_from_circle")

    @pytest.mark.parametrize("ref", ["tests.geometry.vector_from_circle", "tests geometry:f", "tests.geometry:", 42])
    def test_malformed_reference(self, resolver: Resolver, ref) -> None:
        with pytest.raises(IllegalNameError):
            resolver.register(Circle, Vector, ref)

    def test_missing_external_module(self, resolver: Resolver) -> None:
        resolver.register(Circle, Vector, "tests.no_such_module:convert")
        with pytest.raises(TypeLoadError):
            Coercer(resolver).coerce(Vector, Circle(1))
