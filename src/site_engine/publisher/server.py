"""Local preview server for the built site.

``serve`` exposes an existing ``public/`` directory; ``DevServer`` builds
first and rebuilds whenever content, static files or templates change.
"""

from __future__ import annotations

import functools
import threading
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from src.common.logging import setup_logging
from src.site_engine.content import ContentError

from .builder import SiteBuilder

logger = setup_logging(module_name="publisher.server")


class SiteRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that answers missing paths with 404.html."""

    def send_error(self, code, message=None, explain=None):
        if code == HTTPStatus.NOT_FOUND:
            page = Path(self.directory) / "404.html"
            if page.is_file():
                body = page.read_bytes()
                self.send_response(code)
                self.send_header("Content-Type", "text/html; charset=utf-8")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                if self.command != "HEAD":
                    self.wfile.write(body)
                return
        super().send_error(code, message, explain)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(output_dir: Path, host: str, port: int) -> ThreadingHTTPServer:
    handler = functools.partial(SiteRequestHandler, directory=str(output_dir))
    return ThreadingHTTPServer((host, port), handler)


def serve(output_dir: Path, host: str = "127.0.0.1", port: int = 9000) -> None:
    """Serve output_dir until interrupted.

    Raises:
        FileNotFoundError: the site has not been built
    """
    if not output_dir.is_dir():
        raise FileNotFoundError(f"Output directory not found: {output_dir} (run build first)")

    httpd = make_server(output_dir, host, port)
    logger.info("Serving %s at http://%s:%d/", output_dir, host, port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopped")
    finally:
        httpd.server_close()


class ContentWatcher:
    """Detects changes by polling file modification times."""

    def __init__(self, paths: list[Path]):
        self.paths = paths
        self._snapshot = self.snapshot()

    def snapshot(self) -> dict[str, int]:
        state: dict[str, int] = {}
        for root in self.paths:
            if root.is_file():
                files = [root]
            elif root.is_dir():
                files = [p for p in root.rglob("*") if p.is_file()]
            else:
                continue
            for path in files:
                try:
                    state[str(path)] = path.stat().st_mtime_ns
                except FileNotFoundError:
                    continue
        return state

    def changed(self) -> bool:
        """True when any file was added, removed or modified since last call."""
        current = self.snapshot()
        if current != self._snapshot:
            self._snapshot = current
            return True
        return False


class DevServer:
    """Builds the site, serves it and rebuilds on change."""

    def __init__(self, builder: SiteBuilder, poll_interval: float = 1.0):
        self.builder = builder
        self.poll_interval = poll_interval
        self.watcher = ContentWatcher([
            builder.paths.content_dir,
            builder.paths.static_dir,
            builder.renderer.templates_dir,
        ])
        self._lock = threading.Lock()
        self._stop = threading.Event()

    def rebuild(self) -> bool:
        """Incremental rebuild; failures are logged so the watcher keeps running."""
        with self._lock:
            try:
                self.builder.build(clean=False)
            except ContentError as e:
                logger.error("Rebuild failed: %s", e)
                return False
            except Exception:
                logger.exception("Rebuild failed")
                return False
        return True

    def _watch(self) -> None:
        while not self._stop.wait(self.poll_interval):
            if self.watcher.changed():
                logger.info("Change detected, rebuilding")
                self.rebuild()

    def run(self, host: str = "127.0.0.1", port: int = 8000) -> None:
        self.builder.build(clean=False)
        thread = threading.Thread(target=self._watch, name="content-watcher", daemon=True)
        thread.start()
        try:
            serve(self.builder.output_dir, host, port)
        finally:
            self._stop.set()
