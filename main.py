"""Simple entrypoint to run the AuraStyle server locally."""

import uvicorn

from server.api import create_app
from stylist_app.app import StylistApp
from stylist_app.config import StylistConfig


def main() -> None:
    config = StylistConfig.from_env()
    uvicorn.run(create_app(StylistApp(config)), host=config.host, port=config.port, reload=False)


if __name__ == "__main__":
    main()
