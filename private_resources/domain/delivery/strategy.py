"""
File Serve Strategy Interface

Contract for handing a resolved file to the HTTP response. Strategies decide
how the bytes reach the client (streamed by the application, or delegated to
the web server in front of it).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

# Internal location X-Accel-Redirect paths are mapped under.
DEFAULT_X_ACCEL_LOCATION = "/_protected"


class FileServeStrategy(ABC):
    """
    Abstract capability to serve a file into a prepared response.

    Contract Guarantees:
    - `path` is an absolute path to an existing regular file below the storage root
    - Content-Type, Content-Disposition and Content-Length are already set
    - The strategy may change the body, the status code and add headers
    """

    @abstractmethod
    def serve(self, path: Path, response: Any) -> None:
        """
        Serve the file at `path` into `response`.

        Args:
            path: Absolute path of the file to deliver
            response: Response object of the web framework (a Werkzeug
                Response for the Flask integration)
        """
        pass  # pragma: no cover
