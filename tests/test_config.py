"""Tests for CoerceConfig."""

import dataclasses

import pytest

from params_coerce import CoerceConfig, Coercer, ConfigurationError, Resolver


class TestCoerceConfig:
    def test_defaults(self) -> None:
        config = CoerceConfig()
        assert config.thread_safe is True
        assert config.scalars is False
        assert config.log_misses is True

    def test_frozen(self) -> None:
        config = CoerceConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.scalars = True  # type: ignore[misc]

    def test_unknown_field(self) -> None:
        with pytest.raises(TypeError, match="colour"):
            CoerceConfig(colour="blue")  # type: ignore[call-arg]


class TestWiring:
    def test_coercer_takes_resolver_config(self) -> None:
        config = CoerceConfig(scalars=True)
        coercer = Coercer(Resolver(config))
        assert coercer.config is config

    def test_coercer_passes_config_to_resolver(self) -> None:
        config = CoerceConfig(thread_safe=False)
        assert Coercer(config=config).resolver.config is config

    def test_equal_configs_are_accepted(self) -> None:
        coercer = Coercer(Resolver(CoerceConfig(scalars=True)), CoerceConfig(scalars=True))
        assert coercer.config.scalars is True

    def test_conflicting_configs(self) -> None:
        with pytest.raises(ConfigurationError):
            Coercer(Resolver(CoerceConfig(scalars=True)), CoerceConfig(scalars=False))
