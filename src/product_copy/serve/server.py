"""Launch the product copy API under uvicorn."""
from __future__ import annotations
import logging

import uvicorn

from product_copy.common.config import Settings
from product_copy.common.logging_setup import setup_logging

LOGGER = logging.getLogger("product_copy.serve.server")

def main() -> None:
    settings = Settings.load()
    setup_logging(settings.log_level)
    LOGGER.info("Serving on %s:%s (model=%s)", settings.host, settings.port, settings.default_model)
    uvicorn.run(
        "product_copy.serve.fastapi_app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

if __name__ == "__main__":
    main()
