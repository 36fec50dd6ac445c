from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union
import yaml

from .runtime.cache_config import CacheConfig, ConfigError, is_power_of_two
from .runtime.replacement import ReplacementPolicy

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_policy(token: Union[str, ReplacementPolicy]) -> ReplacementPolicy:
    """Parses 'fifo' or 'lru' (any case)."""
    try:
        return ReplacementPolicy(str(token).strip().lower())
    except ValueError:
        raise ConfigError(f"Invalid replacement policy: {token!r} (expected fifo or lru)") from None


def parse_associativity(token: Union[str, int], cache_size: int, block_size: int) -> int:
    """
    Converts an associativity token into a number of ways.

    Accepted forms: 'direct' (1 way), 'assoc' (one set holding every line),
    'assoc:N' (N ways), or a plain integer.
    """
    if isinstance(token, bool):
        raise ConfigError(f"Invalid associativity: {token!r}")
    if isinstance(token, int):
        ways = token
    else:
        text = str(token).strip().lower()
        if text == "direct":
            return 1
        if text == "assoc":
            if not (is_power_of_two(cache_size) and is_power_of_two(block_size)):
                raise ConfigError("Cache size and block size must be powers of two.")
            return cache_size // block_size
        if text.startswith("assoc:"):
            text = text[len("assoc:"):]
        try:
            ways = int(text)
        except ValueError:
            raise ConfigError(f"Invalid associativity: {token!r}") from None

    if not is_power_of_two(ways):
        raise ConfigError(f"Associativity must be a power of two, got {ways}.")
    return ways


@dataclass
class SimConfig:
    """Settings for one trace replay: cache geometry, policy, trace and reporting."""
    # Cache geometry
    cache_size: int = 32 * 1024
    associativity: Union[str, int] = "direct"
    policy: str = "lru"
    block_size: int = 64

    # Input
    trace_file: str = ""

    # Config file
    config_file: str = ""

    # Reporting
    report_dir: Optional[str] = None
    html: bool = True
    ascii_chart: bool = False
    log_level: str = "WARNING"

    def cache_config(self, prefetch: bool = False) -> CacheConfig:
        """Builds a validated CacheConfig. Raises ConfigError on bad settings."""
        for name in ("cache_size", "block_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}.")
        if not (is_power_of_two(self.cache_size) and is_power_of_two(self.block_size)):
            raise ConfigError("Cache size and block size must be powers of two.")
        ways = parse_associativity(self.associativity, self.cache_size, self.block_size)
        return CacheConfig(
            total_size=self.cache_size,
            associativity=ways,
            block_size=self.block_size,
            policy=parse_policy(self.policy),
            prefetch=prefetch,
        )

    def validate(self, require_trace: bool = True) -> CacheConfig:
        """Checks every setting before a run starts."""
        cache_config = self.cache_config()
        if require_trace and not self.trace_file:
            raise ConfigError("No trace file given.")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.log_level!r}")
        return cache_config

    def update_from_yaml(self, yaml_path: str):
        """Updates config fields from a YAML file."""
        try:
            with open(yaml_path, 'r') as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse config file {yaml_path}: {e}") from e
        if not isinstance(yaml_config, dict):
            raise ConfigError(f"Config file {yaml_path} must contain a mapping.")
        known = self.field_names()
        unknown = sorted(str(key) for key in yaml_config if key not in known)
        if unknown:
            raise ConfigError(f"Unknown setting(s) in {yaml_path}: {', '.join(unknown)}")
        for key, value in yaml_config.items():
            setattr(self, key, value)

    @classmethod
    def field_names(cls):
        return {f.name for f in fields(cls)}

    @classmethod
    def from_args(cls, args) -> SimConfig:
        """Factory method to create a SimConfig from parsed argparse arguments."""
        config = cls()

        # 1. Load from YAML config file if provided
        if getattr(args, 'config', None):
            config.config_file = args.config
            if not Path(config.config_file).exists():
                raise ConfigError(f"Config file {config.config_file} not found.")
            config.update_from_yaml(config.config_file)

        # 2. Override with command-line arguments
        known = cls.field_names()
        for key, value in vars(args).items():
            if value is not None and key in known:
                setattr(config, key, value)

        return config
