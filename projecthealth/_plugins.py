"""Built-in and entry-point plugin loading shared by checks and pattern detectors."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Mapping, Sequence, Set, Type, TypeVar

T = TypeVar("T")


def load_plugins(
    base: Type[T],
    builtins: Mapping[str, Callable[[], T]],
    group: str,
    *,
    enabled: Sequence[str] | None = None,
) -> List[T]:
    """Instantiate built-ins, then entry points in ``group``.

    ``enabled`` restricts the result to the named plugins (case-insensitive);
    naming a plugin that does not exist raises ``ValueError``.
    """
    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    plugins: List[T] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], T]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, base):
            raise TypeError(f"Plugin factory for '{name}' did not return a {base.__name__} instance")
        plugins.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in builtins.items():
        _add(name, factory)

    for entry in _iter_entry_points(group):
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - third-party plugin failure
            raise RuntimeError(f"Failed to load plugin entry point '{entry.name}': {exc}") from exc

        def _factory(obj: object = loaded) -> T:
            return _coerce(obj, base)

        _add(entry.name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown plugins requested: {missing}")

    return plugins


def _coerce(obj: object, base: Type[T]) -> T:
    if isinstance(obj, base):
        return obj
    if isinstance(obj, type) and issubclass(obj, base):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, base):
            return instance
    raise TypeError(f"Entry point must be a {base.__name__} subclass or factory")


def _iter_entry_points(group: str) -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=group)


__all__ = ["load_plugins"]
