"""Configuration module for fpsbench."""

from .loader import BenchConfig, Benchmark, Patch, Revision, load_config
from .settings import (
    CARGO_BIN,
    CI_CONFIG_ENV_VAR,
    CI_CONFIG_PATH,
    DEFAULT_CONFIG_PATH,
    DEFAULT_FEATURES,
    DEFAULT_TITLE,
    ECHO_OUTPUT,
    GIT_BIN,
    LOG_LEVEL,
)

__all__ = [
    # Settings
    "CARGO_BIN",
    "CI_CONFIG_ENV_VAR",
    "CI_CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_FEATURES",
    "DEFAULT_TITLE",
    "ECHO_OUTPUT",
    "GIT_BIN",
    "LOG_LEVEL",
    # Benchmark definitions
    "BenchConfig",
    "Benchmark",
    "Patch",
    "Revision",
    "load_config",
]
