"""Shared helpers resolving the automation API the scenario suites run against."""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Generator

import requests
from flask import Flask
from werkzeug.serving import make_server

logger = logging.getLogger(__name__)


def is_api_ready(url: str, timeout: int = 2) -> bool:
    """Return True when the token endpoint answers without a server error."""
    try:
        response = requests.post(f"{url.rstrip('/')}/token", data={}, timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code < 500


def wait_for_api(url: str, timeout: int = 60, interval: int = 1) -> None:
    """Poll the token endpoint until ready or timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_api_ready(url):
            return
        time.sleep(interval)
    raise RuntimeError(f"Automation API at {url} not reachable after {timeout}s")


def serve_stub(app: Flask, host: str = "127.0.0.1", port: int = 0) -> Generator[str, None, None]:
    """
    Serve *app* on a background thread and yield its base URL.

    Port 0 binds a free port chosen by the OS.  The server is shut down
    when the generator is closed.
    """
    server = make_server(host, port, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    base_url = f"http://{host}:{server.server_port}"
    logger.info("Stub automation API listening on %s", base_url)
    try:
        yield base_url
    finally:
        server.shutdown()
        thread.join(timeout=5)


def api_base_url(
    *,
    stub_app: Flask,
    base_url_env: str = "TEST_API_BASE_URL",
    host: str = "127.0.0.1",
    port: int = 0,
) -> Generator[str, None, None]:
    """
    Yield the base URL of the automation API under test.

    Priority:
    1. Use explicit base URL from `base_url_env` (and wait until reachable).
    2. Serve `stub_app` locally and tear it down on exit.
    """
    provided_base_url = os.getenv(base_url_env)
    if provided_base_url:
        wait_for_api(provided_base_url)
        yield provided_base_url.rstrip("/")
        return

    yield from serve_stub(stub_app, host=host, port=port)
