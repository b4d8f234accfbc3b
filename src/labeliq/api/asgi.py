"""ASGI entrypoint for the LabelIQ API."""

from labeliq.api.app import create_app
from labeliq.containers import build_container

app = create_app(build_container())
