"""ASGI entrypoint for the carb tracker API."""

from carb_tracker.api.app import create_app
from carb_tracker.containers import build_container

app = create_app(build_container())
