"""Entry: start the API server."""
import logging

import uvicorn

from delegatify.config import API_HOST, API_PORT, LOG_LEVEL


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s: %(message)s")
    uvicorn.run(
        "delegatify.api.app:app",
        host=API_HOST,
        port=API_PORT,
    )


if __name__ == "__main__":
    main()
