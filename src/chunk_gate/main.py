"""Entrypoint: run the chunk gate server."""

import uvicorn

from chunk_gate.api.app import create_app
from chunk_gate.config.settings import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
