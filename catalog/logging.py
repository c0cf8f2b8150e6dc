from loguru import logger
from catalog.config import AppConfig, get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[backend]}:{extra[collection]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

class CatalogLogger:
    """Loguru setup for the catalog.

    Level comes from config.log_level. Every record carries the active record
    store backend and collection, so local and hosted runs can be told apart.
    """
    def __init__(self, config: AppConfig = None) -> None:
        config = config or get_config()
        logger.configure(
            handlers=[{
                "sink": lambda msg: print(msg, end=""),
                "level": config.log_level.upper(),
                "format": LOG_FORMAT,
            }],
            extra={"backend": config.data_backend, "collection": config.catalog_collection},
        )
        self.logger = logger

    def get_logger(self, name: str = None):
        """Get the configured logger, bound to ``name`` when given.

        Returns:
            loguru.Logger: The configured logger instance.
        """
        if name:
            return self.logger.bind(name=name)
        return self.logger

def get_logger(name: str = None):
    """Get a catalog logger using the latest config."""
    return CatalogLogger().get_logger(name)
