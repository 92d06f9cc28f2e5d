"""Entrypoint: python -m display_service"""
from __future__ import annotations

import uvicorn

from display_service.config import settings


def main() -> None:
    uvicorn.run(
        "display_service.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
