#!/usr/bin/env python3
"""
Main entry point for the indexer
Copies every document of a MongoDB collection into an Elasticsearch index
"""
import sys
import logging
import argparse
from typing import Optional, List

from mongo_indexer.config import IndexerConfig
from mongo_indexer.services import MongoDBService, ElasticsearchService
from mongo_indexer.pipeline import IndexingPipeline
from mongo_indexer.models import IndexingSummary
from mongo_indexer.exceptions import IndexerException, ConfigurationException


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Configure root logging for a run"""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
        force=True
    )


class IndexerService:
    """Service wrapper that owns the connections for one run"""

    def __init__(self, config: IndexerConfig):
        self.config = config
        self.mongodb_service: Optional[MongoDBService] = None
        self.elasticsearch_service: Optional[ElasticsearchService] = None
        self.pipeline: Optional[IndexingPipeline] = None

    def initialize(self):
        """
        Connect and verify source, then sink

        Raises:
            IndexerException: If either connection can't be established
        """
        logger.info("Connecting to MongoDB...")
        self.mongodb_service = MongoDBService(**self.config.get_mongodb_config())
        self.mongodb_service.connect()
        self.mongodb_service.verify()

        logger.info("Connecting to Elasticsearch...")
        self.elasticsearch_service = ElasticsearchService(**self.config.get_elasticsearch_config())
        self.elasticsearch_service.verify()

        self.pipeline = IndexingPipeline(
            mongodb_service=self.mongodb_service,
            elasticsearch_service=self.elasticsearch_service,
            refresh_per_write=self.config.refresh_per_write
        )

    def run(self) -> IndexingSummary:
        """Run the pipeline once"""
        if not self.pipeline:
            raise IndexerException("Pipeline not initialized")
        return self.pipeline.run()

    def stop(self):
        """Release connections"""
        if self.mongodb_service:
            self.mongodb_service.close()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Index every document of a MongoDB collection into Elasticsearch."
    )
    parser.add_argument(
        "--env-file", type=str,
        help="Path to a .env file (default: .env in the working directory, if any)."
    )
    parser.add_argument(
        "--log-level", type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override LOG_LEVEL."
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    setup_logging(args.log_level or "INFO")

    try:
        config = IndexerConfig.from_env(args.env_file)
    except ConfigurationException as e:
        logger.error(f"Configuration validation failed: {e}")
        logger.error("Please check your .env file and ensure all required variables are set")
        return 1

    if not args.log_level:
        logging.getLogger().setLevel(config.log_level)
    config.print_config()

    service = IndexerService(config)
    try:
        service.initialize()
        service.run()
    except IndexerException as e:
        logger.error(f"Fatal error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    finally:
        service.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
