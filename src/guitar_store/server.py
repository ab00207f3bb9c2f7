"""Server entry point."""

import uvicorn

from guitar_store.api import create_app
from guitar_store.config import configure_logging, get_config


def main() -> None:
    """Run the store API with uvicorn using the loaded configuration."""
    config = get_config()
    configure_logging(config.logging)
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
