"""
Product API — Process Entry Point
===================================

Usage:
    python -m product_api
    product-api

Serves `product_api.main:app` with uvicorn on HOST:PORT from settings.
"""

import uvicorn

from product_api.config import settings


def main() -> None:
    uvicorn.run(
        "product_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
