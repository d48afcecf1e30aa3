"""
Delivery Dispatcher

Sets the response metadata of a resolved resource and hands it to the
configured serve strategy.
"""

import logging
import re
import unicodedata
from typing import Any, Optional
from urllib.parse import quote

from private_resources.domain.errors import UnconfiguredStrategyError
from private_resources.domain.resources.value_objects import ResolvedResource

from .strategy_registry import StrategyRegistry

logger = logging.getLogger(__name__)

_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")


def content_disposition(filename: str) -> str:
    """
    Build an attachment Content-Disposition value.

    ASCII filenames produce `attachment;filename="<filename>"`. Other names get
    an ASCII fallback plus an RFC 5987 `filename*` parameter. Control
    characters are dropped; they are not allowed in header values.
    """
    filename = _CONTROL_CHARACTERS.sub("", filename)
    escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
    if escaped.isascii():
        return f'attachment;filename="{escaped}"'

    fallback = (
        unicodedata.normalize("NFKD", escaped).encode("ascii", "ignore").decode("ascii")
    )
    return f"attachment;filename=\"{fallback}\";filename*=UTF-8''{quote(filename, safe='')}"


class DeliveryDispatcher:
    """Selects the serve strategy and prepares the response headers."""

    def __init__(self, registry: StrategyRegistry):
        self.registry = registry

    def dispatch(
        self,
        strategy_name: Optional[str],
        resource: ResolvedResource,
        response: Any,
    ) -> None:
        """
        Serve a resolved resource into a response.

        Headers are only written once the strategy has been resolved, so a
        configuration error leaves the response untouched.

        Args:
            strategy_name: Configured strategy name
            resource: Resolved file and metadata
            response: Response object with a mutable `headers` mapping

        Raises:
            UnconfiguredStrategyError: If no strategy name is configured
            UnknownStrategyError: If the name does not resolve to a FileServeStrategy
        """
        if not strategy_name:
            raise UnconfiguredStrategyError('No "serveStrategy" configured')

        strategy = self.registry.resolve(strategy_name)

        metadata = resource.metadata
        response.headers["Content-Type"] = metadata.media_type
        response.headers["Content-Disposition"] = content_disposition(metadata.filename)
        response.headers["Content-Length"] = str(metadata.file_size)

        logger.debug(
            f"Serving resource {metadata.sha1[:8]} with strategy {type(strategy).__name__}"
        )
        strategy.serve(resource.path, response)
