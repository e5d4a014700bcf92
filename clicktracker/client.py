"""Command-line polling client for the click tracker.

Mirrors the browser page: ``click`` records one click, ``watch`` polls
``/clicks`` on a fixed interval and prints the running count. Failures are
logged and polling carries on at the same pace.
"""

import http.client
import json
import logging
import time
import urllib.error
import urllib.request
from typing import Callable, List, Optional

import typer

from .config import config

logger = logging.getLogger(__name__)

app = typer.Typer(help="Record clicks and watch the click count")


class ClientError(Exception):
    """Raised when the server cannot be reached or answers with a failure."""


def _call(url: str, method: str, timeout: float) -> bytes:
    data = b"" if method == "POST" else None
    req = urllib.request.Request(url, data=data, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as r:
            return r.read()
    except urllib.error.HTTPError as e:
        raise ClientError(f"{method} {url} failed with status {e.code}") from e
    except urllib.error.URLError as e:
        raise ClientError(f"{method} {url} failed: {e.reason}") from e
    except (OSError, http.client.HTTPException) as e:
        # read timeouts and dropped connections surface past urlopen unwrapped
        raise ClientError(f"{method} {url} failed: {e!r}") from e


def record_click(base_url: str, timeout: float = config.CLIENT_TIMEOUT) -> None:
    """POST one click. No retry: a repeated POST would be a second click."""
    _call(base_url.rstrip("/") + "/clicked", "POST", timeout)


def fetch_clicks(base_url: str, timeout: float = config.CLIENT_TIMEOUT) -> List[dict]:
    raw = _call(base_url.rstrip("/") + "/clicks", "GET", timeout)
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ClientError(f"bad JSON from /clicks: {e}") from e
    if not isinstance(data, list):
        raise ClientError(f"expected a list from /clicks, got {type(data).__name__}")
    return data


def poll(
    base_url: str,
    on_count: Callable[[int], None],
    interval: float = 1.0,
    iterations: Optional[int] = None,
    timeout: float = config.CLIENT_TIMEOUT,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Fetch the click list every ``interval`` seconds and report its length.

    Runs forever unless ``iterations`` is given. A failed fetch is logged and
    the next one happens after the same interval.
    """
    done = 0
    while iterations is None or done < iterations:
        try:
            on_count(len(fetch_clicks(base_url, timeout=timeout)))
        except ClientError as e:
            logger.warning("Poll failed: %s", e)
        done += 1
        if iterations is None or done < iterations:
            sleep(interval)


@app.command()
def click(
    server: str = typer.Option(config.SERVER_URL, help="Base URL of the click server"),
    timeout: float = typer.Option(config.CLIENT_TIMEOUT, help="Seconds to wait for the server"),
):
    """Record a single click."""
    try:
        record_click(server, timeout=timeout)
    except ClientError as e:
        logger.error("Click was not recorded: %s", e)
        raise typer.Exit(code=1)
    typer.echo("click was recorded")


@app.command()
def watch(
    server: str = typer.Option(config.SERVER_URL, help="Base URL of the click server"),
    interval: float = typer.Option(config.POLL_INTERVAL, help="Seconds between polls"),
    count: Optional[int] = typer.Option(None, help="Stop after this many polls"),
    timeout: float = typer.Option(config.CLIENT_TIMEOUT, help="Seconds to wait for each poll"),
):
    """Poll the server and print the click count."""
    poll(
        server,
        lambda n: typer.echo(f"Button was clicked {n} times"),
        interval=interval,
        iterations=count,
        timeout=timeout,
    )


def main():
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app()


if __name__ == "__main__":
    main()
