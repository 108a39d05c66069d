"""ASGI entrypoint for the drone gallery front end."""

from drone_gallery.api.app import create_app
from drone_gallery.containers import build_container

app = create_app(build_container())
