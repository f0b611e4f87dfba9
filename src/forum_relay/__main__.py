"""Run the relay with uvicorn: ``python -m forum_relay``."""

import uvicorn

from forum_relay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "forum_relay.app:app",
        host="0.0.0.0",
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
