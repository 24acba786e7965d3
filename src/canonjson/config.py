from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import DEFAULT_MAX_DEPTH, MAX_DEPTH_ENV
from .exceptions import ConfigError


@dataclass(frozen=True)
class EncoderConfig:
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigError("max_depth must be an int")
        if self.max_depth < 1:
            raise ConfigError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EncoderConfig:
        """Build a config from ``CANONJSON_*`` environment variables."""
        env = os.environ if environ is None else environ
        raw = env.get(MAX_DEPTH_ENV)
        if raw is None or raw.strip() == "":
            return cls()
        try:
            max_depth = int(raw)
        except ValueError as e:
            raise ConfigError(f"{MAX_DEPTH_ENV} must be an integer, got {raw!r}") from e
        return cls(max_depth=max_depth)


def resolve_max_depth(max_depth: int | None) -> int:
    if max_depth is not None:
        return EncoderConfig(max_depth=max_depth).max_depth
    return EncoderConfig.from_env().max_depth
