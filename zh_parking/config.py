import os
from typing import Literal

import yaml
import logging
from pydantic import BaseModel, Field, field_validator

from zh_parking.scheduler import CronSpec

logger = logging.getLogger(__name__)

CONFIG_PATH = os.getenv("CONFIG_PATH", "config/exporter-config.yaml")

DEFAULT_FEED_URL = "https://www.pls-zh.ch/plsFeed/rss"
# every 5 minutes, 15 seconds past the mark
DEFAULT_CRON = "15 */5 * * *"


class FeedSettings(BaseModel):
    """
    Configuration for the upstream RSS feed.
    This class defines the feed URL and the request timeout.
    """
    url: str = Field(DEFAULT_FEED_URL, description="URL of the parking RSS feed")
    timeout: float = Field(10.0, gt=0, description="Request timeout in seconds")

    def __init__(self, **data):
        logger.debug(f"Initializing FeedSettings with data: {data}")
        super().__init__(**data)


class ScheduleSettings(BaseModel):
    """
    Configuration for the polling schedule.
    This class defines the seconds-first cron expression and whether to poll once before serving.
    """
    cron: str = Field(DEFAULT_CRON, description="Cron expression: second minute hour dom month [dow]")
    fetch_on_startup: bool = Field(True, description="Run one fetch cycle before the server starts")

    @field_validator("cron")
    @classmethod
    def check_cron(cls, v):
        logger.debug(f"Validating cron expression '{v}'")
        try:
            CronSpec.parse(v)
        except ValueError as e:
            logger.error(f"Invalid cron expression '{v}'")
            raise ValueError(f"Invalid cron expression '{v}': {e}") from e
        return v


class ServerSettings(BaseModel):
    """
    Configuration for the metrics HTTP server.
    """
    port: int = Field(4277, ge=1, le=65535, description="Port to serve /metrics on")
    addr: str = Field("0.0.0.0", description="Address to bind the metrics server to")


class LoggingConfig(BaseModel):
    """
    Configuration for logging settings.
    This class defines the logging level for the application.
    """
    level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = Field(
        "INFO", description="Logging level"
    )

    def __init__(self, **data):
        logger.debug(f"Initializing LoggingConfig with data: {data}")
        super().__init__(**data)


class ExporterConfig(BaseModel):
    """
    Configuration for the exporter application.
    This class encapsulates the feed, schedule, server and logging settings.
    Every section has defaults, so an empty document is a valid configuration.
    """
    feed: FeedSettings = Field(default_factory=FeedSettings)
    schedule: ScheduleSettings = Field(default_factory=ScheduleSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: str = None) -> "ExporterConfig":
        """
        Load and validate the exporter configuration from YAML.
        Falls back to the built-in defaults when the file does not exist.
        Args:
            path (str): Path of the YAML file; defaults to CONFIG_PATH.
        Returns:
            ExporterConfig: The validated configuration object.
        Raises:
            ValueError: If the file exists but the configuration is invalid.
        """
        path = path or CONFIG_PATH
        if not os.path.exists(path):
            logger.info(f"No configuration file at {path}, using defaults")
            return cls()

        logger.info(f"Loading configuration from {path}")
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
                logger.debug(f"Raw config data: {data}")
        except yaml.YAMLError as e:
            logger.exception(f"Configuration file at {path} is not valid YAML")
            raise ValueError(f"Invalid configuration: {e}") from e

        try:
            config = cls(**data)
            logger.info("Configuration loaded and validated successfully")
            logger.debug(f"Final config object: {config}")
            return config
        except Exception as e:
            logger.exception("Invalid configuration provided")
            raise ValueError(f"Invalid configuration: {e}") from e


def get_config() -> ExporterConfig:
    """
    Retrieve the exporter configuration, loading it from the specified YAML file.
    Returns:
        ExporterConfig: The validated configuration object.
    """
    logger.info("Retrieving exporter configuration")
    config = ExporterConfig.load()
    logger.debug(f"Parsed configuration object: {config}")
    return config
