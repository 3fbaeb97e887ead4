"""ASGI entrypoint for the Four Six API."""

from four_six.api.app import create_app
from four_six.containers import build_container

app = create_app(build_container())
