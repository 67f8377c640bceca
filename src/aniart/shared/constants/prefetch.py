"""Prefetch and warm-up limits."""


class PrefetchConfig:
    """Defaults for image warm-up."""

    MAX_JOBS = 64
    CONCURRENCY = 4
    STARTUP_TIMEOUT = 9.0  # seconds

    LOGO_WIDTH = 520
    LOGO_HEIGHT = 220

    # Leading cover URLs taken from each home row
    HOME_ROW_TAKE = 14
    WARMUP_ROW_TAKE = 18
