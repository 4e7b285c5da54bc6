"""
Main entrypoint: FastAPI server for ENS Graph.

Env: DATABASE_URL or DATABASE_PATH, ETHERSCAN_API_KEY, ALCHEMY_KEY, API_HOST, API_PORT, LOG_LEVEL.

Equivalent: uvicorn ensgraph.api_server.app:app --host 0.0.0.0 --port 8000
"""

# Configure structured JSON logging before other imports that may log
from ensgraph.ensgraph_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    from ensgraph.config import get_settings

    settings = get_settings()
    if not settings.etherscan_api_key:
        logger.warning("main_config_warning", message="ETHERSCAN_API_KEY not set: activity falls back to cache/demo data")

    from ensgraph.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
