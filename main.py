"""
Getting started — fetch one resource through the OAuth2 connector.

    python main.py "rest-1.v1/Data/Member/20?sel=Name,Email"

Reads V1_BASE_URL, V1_SECRETS_FILE and V1_CREDENTIALS_FILE from the
environment (or .env); set DEBUG=true to trace requests.
"""

from __future__ import annotations

import logging
import sys

from config.settings import config
from connectors import ConnectorError, OAuth2APIConnector

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def main(argv: list[str]) -> int:
    path = argv[1] if len(argv) > 1 else "rest-1.v1/Data/Member/20?sel=Name,Email"
    with OAuth2APIConnector.from_config() as connector:
        connector.custom_http_headers["X-Client-Name"] = "Getting Started"
        try:
            body = connector.get_data(path).read()
        except ConnectorError as exc:
            logger.error("Request failed: %s", exc)
            return 1
    sys.stdout.write(body.decode("utf-8", errors="replace") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
