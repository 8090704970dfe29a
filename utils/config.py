"""
Configuration management module.
"""
import os
import yaml
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class Config:
    """Application configuration: default screening policy plus upload limits."""

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration from YAML file or defaults.

        Args:
            config_path: Path to config YAML file
        """
        # Default screening policy
        self.required_keywords = "React, JavaScript, Accessibility"
        self.preferred_keywords = "TypeScript, Node.js, Leadership, Inclusive design"
        self.keyword_strictness = 70
        self.section_weights = {'experience': 50, 'skills': 30, 'education': 20}
        self.min_years = 3
        self.format_style = "plain"
        self.knockouts = [
            "No degree listed",
            "Employment gap > 12 months",
            "Generic resume format"
        ]
        self.pass_threshold = 70
        self.identity = "John"
        self.penalty_order = "after_bias"

        # Simulation tables; empty means the built-in tables
        self.identity_labels: Dict[str, float] = {}
        self.cohorts: List[Dict[str, Any]] = []
        self.extra_synonyms: Dict[str, List[str]] = {}

        # Upload handling
        self.max_file_size_mb = 10
        self.min_extracted_chars = 50
        self.enable_ocr = False
        self.log_level = "INFO"

        if os.path.exists(config_path):
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    config_data = yaml.safe_load(f)
                    self._load_from_dict(config_data)
                    logger.info(f"Configuration loaded from {config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {str(e)}")
        else:
            logger.info("Using default configuration")

        self._load_from_env()

    def _load_from_dict(self, config_data: Optional[dict]) -> None:
        """Load configuration from dictionary."""
        if not config_data:
            return
        if not isinstance(config_data, dict):
            logger.warning("Config file must contain a mapping; ignoring it")
            return

        for key in (
            'required_keywords', 'preferred_keywords', 'keyword_strictness',
            'min_years', 'format_style', 'pass_threshold', 'identity',
            'penalty_order', 'max_file_size_mb', 'min_extracted_chars',
            'enable_ocr', 'log_level'
        ):
            if key in config_data:
                setattr(self, key, config_data[key])

        if isinstance(config_data.get('section_weights'), dict):
            self.section_weights = {**self.section_weights, **config_data['section_weights']}

        knockouts = config_data.get('knockouts', self.knockouts)
        if isinstance(knockouts, (str, int, float)):
            knockouts = [knockouts]
        self.knockouts = [str(k) for k in (knockouts or [])]

        self.identity_labels = config_data.get('identity_labels') or self.identity_labels
        self.cohorts = config_data.get('cohorts') or self.cohorts
        self.extra_synonyms = config_data.get('extra_synonyms') or self.extra_synonyms

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        if os.getenv('ATS_STRICTNESS'):
            self.keyword_strictness = os.getenv('ATS_STRICTNESS')

        if os.getenv('ATS_PASS_THRESHOLD'):
            self.pass_threshold = os.getenv('ATS_PASS_THRESHOLD')

        if os.getenv('ATS_MIN_YEARS'):
            self.min_years = os.getenv('ATS_MIN_YEARS')

        if os.getenv('ATS_FORMAT_STYLE'):
            self.format_style = os.getenv('ATS_FORMAT_STYLE')

        if os.getenv('ATS_IDENTITY'):
            self.identity = os.getenv('ATS_IDENTITY')

        if os.getenv('ATS_LOG_LEVEL'):
            self.log_level = os.getenv('ATS_LOG_LEVEL')

        if os.getenv('MAX_FILE_SIZE_MB'):
            self.max_file_size_mb = os.getenv('MAX_FILE_SIZE_MB')
