from __future__ import annotations

import logging


def configure_app_logging(level: str = "INFO") -> None:
    """
    Set the level for every logger under the `app` namespace.

    Notes:
    - Uvicorn installs the handlers; this only controls our package's verbosity.
    - `APP_LOG_LEVEL=DEBUG` (or INFO/WARNING/ERROR) switches it at startup.
    - Tokens and passwords are never passed to a logger anywhere in `app.*`.
    """

    normalized = level.upper()
    app_logger = logging.getLogger("app")
    app_logger.setLevel(normalized)
    app_logger.propagate = True

    if not logging.getLogger().handlers and not app_logger.handlers:
        # Running outside uvicorn (scripts, REPL): give our records somewhere to go.
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        app_logger.addHandler(handler)
