"""
Configuration - Environment-driven settings.

All values are read once at import time. Override them through the
environment before starting the API or the CLI.
"""

import os

TERRAFLOW_LOG_LEVEL = os.getenv("TERRAFLOW_LOG_LEVEL", "INFO").upper()
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# Sessions idle for longer than this are removed by cleanup_stale_sessions()
TERRAFLOW_SESSION_TTL = int(os.getenv("TERRAFLOW_SESSION_TTL", "3600"))

# Seed for board shuffling when a request does not provide one (empty = fixed map)
_default_seed = os.getenv("TERRAFLOW_DEFAULT_SEED", "")
TERRAFLOW_DEFAULT_SEED: int | None = int(_default_seed) if _default_seed else None
