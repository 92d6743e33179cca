"""Run the bridge with uvicorn: `python -m mfc_bridge`."""

from __future__ import annotations

import logging

import uvicorn

from mfc_bridge.config.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    port = settings.resolved_port()
    logger.info(
        "server event=starting port=%s downstream_base_url=%s",
        port,
        settings.resolved_downstream_base_url(),
    )
    uvicorn.run(
        "mfc_bridge.api.main:app",
        host=settings.host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
