"""Command-line entrypoint that serves the kiosk API."""

import uvicorn

from aibooth.api.app import create_app
from aibooth.config import Settings
from aibooth.containers import build_container


def main() -> None:
    """Run the kiosk API with uvicorn."""
    settings = Settings()
    app = create_app(build_container(settings))
    print(f"AiBooth kiosk for event {settings.kiosk_event_id}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
