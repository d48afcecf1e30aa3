"""
Serve Strategies

Werkzeug/Flask implementations of FileServeStrategy:

- ReadfileStrategy streams the file from the application process and
  answers HTTP Range requests.
- XSendfileStrategy delegates the transfer to Apache/lighttpd (mod_xsendfile).
- XAccelRedirectStrategy delegates the transfer to an nginx internal location.
"""

import os
import posixpath
from pathlib import Path
from typing import Any, Union

from flask import request
from werkzeug.wsgi import wrap_file

from private_resources.domain.delivery.strategy import DEFAULT_X_ACCEL_LOCATION, FileServeStrategy


class ReadfileStrategy(FileServeStrategy):
    """
    Streams the file through the WSGI server.

    Must be used inside a Flask request context.
    """

    def __init__(self, buffer_size: int = 8192):
        self.buffer_size = buffer_size

    @classmethod
    def from_options(cls, **options) -> "ReadfileStrategy":
        return cls()

    def serve(self, path: Path, response: Any) -> None:
        environ = request.environ
        file_handle = open(path, "rb")
        try:
            response.response = wrap_file(environ, file_handle, self.buffer_size)
            response.direct_passthrough = True
            response.make_conditional(
                environ,
                accept_ranges=True,
                complete_length=os.fstat(file_handle.fileno()).st_size,
            )
        except Exception:
            file_handle.close()
            raise


class XSendfileStrategy(FileServeStrategy):
    """Sets `X-Sendfile` so the web server sends the file."""

    header = "X-Sendfile"

    @classmethod
    def from_options(cls, **options) -> "XSendfileStrategy":
        return cls()

    def serve(self, path: Path, response: Any) -> None:
        response.headers[self.header] = str(path)
        response.set_data(b"")
        # set_data() recomputes the length; the web server sends the real body
        response.headers["Content-Length"] = str(os.path.getsize(path))


class XAccelRedirectStrategy(FileServeStrategy):
    """
    Sets `X-Accel-Redirect` to an nginx internal location.

    The location must map to the storage root, e.g.:

        location /_protected/ {
            internal;
            alias /data/resources/;
        }
    """

    header = "X-Accel-Redirect"

    def __init__(
        self,
        base_path: Union[str, Path],
        location: str = DEFAULT_X_ACCEL_LOCATION,
    ):
        self.base_path = Path(base_path).resolve()
        self.location = "/" + location.strip("/")

    @classmethod
    def from_options(
        cls, base_path=None, x_accel_location=DEFAULT_X_ACCEL_LOCATION, **options
    ) -> "XAccelRedirectStrategy":
        if base_path is None:
            raise TypeError("XAccelRedirectStrategy requires base_path")
        return cls(base_path, x_accel_location)

    def serve(self, path: Path, response: Any) -> None:
        relative = Path(path).resolve().relative_to(self.base_path)
        response.headers[self.header] = posixpath.join(self.location, relative.as_posix())
        response.set_data(b"")
        response.headers["Content-Length"] = str(os.path.getsize(path))


def register_default_strategies(registry, base_path, x_accel_location=DEFAULT_X_ACCEL_LOCATION) -> None:
    """
    Register the built-in strategies under their short names.

    Args:
        registry: StrategyRegistry to populate
        base_path: Storage root, needed by XAccelRedirectStrategy
        x_accel_location: nginx internal location mapped to the storage root
    """
    registry.register_singleton("readfile", ReadfileStrategy())
    registry.register_singleton("x_sendfile", XSendfileStrategy())
    if base_path:
        registry.register_singleton(
            "x_accel_redirect", XAccelRedirectStrategy(base_path, x_accel_location)
        )
