"""ASGI entrypoint for the food requests API."""

from food_requests.api.app import create_app
from food_requests.containers import build_container

app = create_app(build_container())
