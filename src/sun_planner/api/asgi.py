"""ASGI entrypoint for the sun planner API."""

from sun_planner.api.app import create_app
from sun_planner.containers import build_container

app = create_app(build_container())
