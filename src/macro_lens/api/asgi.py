"""ASGI entrypoint for the macro lens API."""

from macro_lens.api.app import create_app
from macro_lens.containers import build_container

app = create_app(build_container())
