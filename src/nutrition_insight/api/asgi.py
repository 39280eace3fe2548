"""ASGI entrypoint for the nutrition insight API."""

from nutrition_insight.api.app import create_app
from nutrition_insight.containers import build_container

app = create_app(build_container())
