from dataclasses import dataclass


@dataclass(frozen=True)
class CoerceConfig:
    """
    Settings of a Coercer and its Resolver.

    thread_safe: guard the resolution cache with a lock
    scalars: let built-in scalars (str, int, float...) take part in coercion.
        Off by default: a scalar is not an object that can be coerced, so it
        gives None without any lookup.
    log_misses: emit a debug event each time a coercion yields no result
    """
    thread_safe: bool = True
    scalars: bool = False
    log_misses: bool = True
