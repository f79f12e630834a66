"""ASGI entrypoint for the kiosk API."""

from aibooth.api.app import create_app
from aibooth.containers import build_container

app = create_app(build_container())
