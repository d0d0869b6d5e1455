"""Main entry point for the FitScore API server"""
import logging
import uvicorn
from fitscore.config import validate_config, API_HOST, API_PORT, LOG_LEVEL
from fitscore.api.server import create_api_application
from fitscore.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def main() -> None:
    """Validate configuration and serve the API"""
    logger.info("Validating configuration...")
    try:
        validate_config()
    except ValueError as e:
        raise ConfigurationError(str(e), operation="validate_config") from e

    app = create_api_application()

    logger.info(f"Serving FitScore API on {API_HOST}:{API_PORT}")
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
