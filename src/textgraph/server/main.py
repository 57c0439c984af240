from __future__ import annotations

import logging

import uvicorn

from textgraph.settings import settings

from .app import create_app


def main(host: str | None = None, port: int | None = None) -> None:
    logging.basicConfig(
        level=(settings.log_level or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(),
        host=host or settings.bind_host,
        port=port or settings.bind_port,
        log_level=(settings.log_level or "info").lower(),
    )


if __name__ == "__main__":
    main()
