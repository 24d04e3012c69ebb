from typing import Any, Mapping, TypeVar

C = TypeVar("C", bound=Mapping[str, Any])


def resolve_config(config: Mapping[str, Any], default_config: C) -> C:
    """Overlay the known keys of a partial config onto its defaults; unknown keys are ignored."""
    return {key: config.get(key, default) for key, default in default_config.items()}  # type: ignore[return-value]
