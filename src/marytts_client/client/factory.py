"""Factory for creating clients based on config."""

import logging

from marytts_client.client.mary_client import MaryClient
from marytts_client.core.config import AppConfig

logger = logging.getLogger(__name__)


def create_client(config: AppConfig) -> MaryClient:
    """Create a client for the server named in ``config``."""
    server = config.server
    client = MaryClient(
        host=server.host,
        port=server.port,
        timeout=server.timeout,
        max_workers=config.max_workers,
    )
    logger.debug(f"MaryTTS client for {client.base_url}")
    return client
