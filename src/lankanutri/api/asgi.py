"""ASGI entrypoint for the LankaNutri API."""

from lankanutri.api.app import create_app
from lankanutri.containers import build_container

app = create_app(build_container())
