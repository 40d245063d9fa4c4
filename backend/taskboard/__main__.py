from __future__ import annotations

import uvicorn

from taskboard.core.config import settings


def main() -> None:
    uvicorn.run(
        "taskboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
