"""
Main entrypoint: FastAPI server for wallet flow analysis.

Env: HELIUS_API_KEY (optional; clients may send X-Helius-Api-Key instead),
API_HOST, API_PORT, LOG_LEVEL.

Equivalent: uvicorn solflow.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured logging before other imports that may log
from solflow.solflow_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the API server in the main thread."""
    api_host = os.getenv("API_HOST", "0.0.0.0").strip()
    api_port = int(os.getenv("API_PORT", "8000").strip() or "8000")

    from solflow.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=api_host, port=api_port)
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
