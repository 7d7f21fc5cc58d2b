"""
Background web server.

Serves a WSGI application from a worker thread so the bootstrap thread stays
free to wait for the termination signal. Binding happens synchronously in
`start()` so address conflicts surface during startup.
"""

import logging
import socket
import threading
from typing import Optional

from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server, select_address_family

logger = logging.getLogger(__name__)


class WebServer:
    """Werkzeug server running on a dedicated thread."""

    def __init__(
        self,
        app: Flask,
        host: str,
        port: int,
        *,
        threaded: bool = True,
        shutdown_timeout_seconds: float = 10.0,
    ) -> None:
        self.app = app
        self.host = host
        self.port = port
        self.threaded = threaded
        self.shutdown_timeout_seconds = shutdown_timeout_seconds
        self._server: Optional[BaseWSGIServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_serving(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def bound_port(self) -> Optional[int]:
        """Actual listening port (differs from `port` when port 0 was requested)."""
        return self._server.port if self._server else None

    def start(self) -> None:
        """Bind the listener and start serving.

        Raises:
            OSError: if the address cannot be bound
        """
        if self._server is not None:
            raise RuntimeError("Web server already started")
        # Bind here: werkzeug exits the process itself when it fails to bind
        listener = socket.create_server(
            (self.host, self.port), family=select_address_family(self.host, self.port)
        )
        try:
            self._server = make_server(
                self.host, self.port, self.app, threaded=self.threaded, fd=listener.fileno()
            )
        finally:
            listener.close()
        self._thread = threading.Thread(
            target=self._server.serve_forever,
            name=f"web-{self.app.name}",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Web interface listening on {self.host}:{self.bound_port}")

    def stop(self) -> None:
        """Stop serving and release the listener. Safe to call multiple times."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=self.shutdown_timeout_seconds)
            if self._thread.is_alive():
                logger.warning("Web server thread did not stop within timeout")
        self._server = None
        self._thread = None
        logger.info("Web interface stopped")
