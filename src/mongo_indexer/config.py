"""
Configuration for the indexer
Loads settings from the environment and an optional .env file
"""
import os
import re
import math
import logging
from typing import Optional, Dict, Any
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ValidationError, validator

from .exceptions import ConfigurationException


logger = logging.getLogger(__name__)

REFRESH_OPTIONS = ("true", "false", "wait_for")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class IndexerConfig(BaseModel):
    """Immutable settings for one indexing run"""

    # MongoDB (source)
    mongodb_uri: str
    mongo_db_name: str
    mongo_collection_name: str

    # Elasticsearch (sink)
    elasticsearch_host: str = "localhost"
    elasticsearch_port: int
    elasticsearch_index_name: str
    elasticsearch_refresh: str = "true"
    elasticsearch_timeout: float = 10.0

    log_level: str = "INFO"

    class Config:
        frozen = True

    @validator('mongodb_uri')
    def uri_scheme(cls, v):
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError('must start with mongodb:// or mongodb+srv://')
        return v

    @validator('elasticsearch_port')
    def port_in_range(cls, v):
        if not 0 < v < 65536:
            raise ValueError('must be between 1 and 65535')
        return v

    @validator('elasticsearch_timeout')
    def timeout_positive(cls, v):
        if not math.isfinite(v) or v <= 0:
            raise ValueError('must be a positive number of seconds')
        return v

    @validator('elasticsearch_refresh')
    def refresh_option(cls, v):
        v = v.strip().lower()
        if v not in REFRESH_OPTIONS:
            raise ValueError(f"must be one of {', '.join(REFRESH_OPTIONS)}")
        return v

    @validator('log_level')
    def log_level_name(cls, v):
        v = v.strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f'unknown log level {v}')
        return v

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "IndexerConfig":
        """
        Build the configuration from environment variables

        Args:
            env_file: Optional path to a .env file. Defaults to ./.env when present.

        Returns:
            IndexerConfig: Validated, immutable configuration

        Raises:
            ConfigurationException: If a required value is missing or malformed
        """
        if env_file and not os.path.isfile(env_file):
            raise ConfigurationException(f"Env file not found: {env_file}")
        # Existing environment variables win over .env values
        load_dotenv(env_file or find_dotenv(usecwd=True))

        values = {}
        for var, field in ENVIRONMENT.items():
            raw = os.getenv(var)
            if raw is not None and raw.strip() != "":
                values[field] = raw.strip()

        missing = [var for var in REQUIRED_VARS if ENVIRONMENT[var] not in values]
        if missing:
            raise ConfigurationException(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationException("Invalid configuration", original_error=e)

    @property
    def elasticsearch_address(self) -> str:
        return f"http://{self.elasticsearch_host}:{self.elasticsearch_port}"

    @property
    def refresh_per_write(self) -> bool:
        return self.elasticsearch_refresh == "true"

    def get_mongodb_config(self) -> Dict[str, Any]:
        """Get MongoDB configuration as dict"""
        return {
            'uri': self.mongodb_uri,
            'database_name': self.mongo_db_name,
            'collection_name': self.mongo_collection_name
        }

    def get_elasticsearch_config(self) -> Dict[str, Any]:
        """Get Elasticsearch configuration as dict"""
        return {
            'address': self.elasticsearch_address,
            'index_name': self.elasticsearch_index_name,
            'refresh': self.elasticsearch_refresh,
            'timeout': self.elasticsearch_timeout
        }

    def print_config(self):
        """Log current configuration (masked sensitive data)"""
        logger.info("=== Indexer Configuration ===")
        logger.info(f"MongoDB URI: {mask_uri(self.mongodb_uri)}")
        logger.info(f"MongoDB Source: {self.mongo_db_name}.{self.mongo_collection_name}")
        logger.info(f"Elasticsearch: {self.elasticsearch_address}")
        logger.info(f"Elasticsearch Index: {self.elasticsearch_index_name}")
        logger.info(f"Refresh: {self.elasticsearch_refresh}")
        logger.info("=" * 29)


ENVIRONMENT = {
    'MONGODB_URI': 'mongodb_uri',
    'MONGO_DB_NAME': 'mongo_db_name',
    'MONGO_COLLECTION_NAME': 'mongo_collection_name',
    'ELASTICSEARCH_HOST': 'elasticsearch_host',
    'ELASTICSEARCH_PORT': 'elasticsearch_port',
    'ELASTICSEARCH_INDEX_NAME': 'elasticsearch_index_name',
    'ELASTICSEARCH_REFRESH': 'elasticsearch_refresh',
    'ELASTICSEARCH_TIMEOUT': 'elasticsearch_timeout',
    'LOG_LEVEL': 'log_level',
}

REQUIRED_VARS = [
    'MONGODB_URI',
    'ELASTICSEARCH_PORT',
    'MONGO_DB_NAME',
    'MONGO_COLLECTION_NAME',
    'ELASTICSEARCH_INDEX_NAME',
]


def mask_uri(uri: str) -> str:
    """Hide the password part of a connection string"""
    return re.sub(r'//([^:/@]+):([^@/]+)@', r'//\1:****@', uri)
