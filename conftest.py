"""Global pytest configuration."""

import os

# Pin grid settings for tests before any imports read them
os.environ.setdefault("TRIPCAL_PX_PER_HOUR", "48")
os.environ.setdefault("TRIPCAL_DAY_START_HOUR", "0")
