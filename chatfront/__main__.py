from __future__ import annotations

import structlog
import uvicorn

from . import config
from .logging_setup import configure_logging
from .supervision import install_crash_handlers


def main() -> None:
    config.init_env()
    configure_logging()
    install_crash_handlers()

    from .app import create_app

    app = create_app()
    structlog.get_logger("chatfront").info(
        "Server started",
        port=config.port(),
        apiBaseUrl=app.state.api_base_url,
        appEnv=config.app_env(),
    )
    # Access lines come from our own middleware
    uvicorn.run(app, host=config.host(), port=config.port(), access_log=False, log_config=None)


if __name__ == "__main__":
    main()
