import os

from .compat import env_bool

__all__ = [
    "CARGO_BIN",
    "CI_CONFIG_ENV_VAR",
    "CI_CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_FEATURES",
    "DEFAULT_TITLE",
    "ECHO_OUTPUT",
    "GIT_BIN",
    "LOG_LEVEL",
]

# Logging level for the CLI (overridden by --verbose)
LOG_LEVEL = (os.getenv("FPSBENCH_LOG_LEVEL", "") or "INFO").strip().upper()

# Benchmark definition file, resolved against the current directory
DEFAULT_CONFIG_PATH = os.getenv("FPSBENCH_CONFIG", "") or "fpsbench.toml"

# Scratch run-configuration artifact, written into the benchmarked working tree.
# The benchmarked app reads it through CI_CONFIG_ENV_VAR and exits after N frames.
CI_CONFIG_PATH = os.getenv("FPSBENCH_CI_CONFIG_PATH", "") or "fpsbench-ci-config.ron"
CI_CONFIG_ENV_VAR = "CI_TESTING_CONFIG"

# External tools
CARGO_BIN = os.getenv("FPSBENCH_CARGO", "") or "cargo"
GIT_BIN = os.getenv("FPSBENCH_GIT", "") or "git"

# Cargo features enabled for every run unless the config overrides them
DEFAULT_FEATURES: tuple[str, ...] = ("bevy_ci_testing",)

# Corner cell of the comparison table
DEFAULT_TITLE = "fpsbench"

# Echo captured child stdout/stderr (default: true)
ECHO_OUTPUT = env_bool("FPSBENCH_ECHO_OUTPUT", default=True)
