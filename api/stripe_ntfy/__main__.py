"""Entry point: ``python -m stripe_ntfy`` or the ``stripe-ntfy`` script."""

import logging

import uvicorn

from stripe_ntfy.config import load_settings
from stripe_ntfy.main import create_app

logger = logging.getLogger("stripe_ntfy")


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    logger.info("Listening on %s ...", settings.listen_addr)
    uvicorn.run(
        app,
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
