"""Strategy registry — maps content schema names to presentation strategies.

Follows the same pattern as the experiment registry:
- YAML definitions file loaded once
- In-memory dict keyed by schema_name
- One instance per application, built in the app lifespan
- Read-only after load; safe for concurrent lookups
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from frontend.presenters import PRESENTERS
from .schemas import PageTemplate, PresentationStrategy, StrategySummary

logger = logging.getLogger(__name__)

DEFINITIONS_FILE = Path(__file__).parent / "definitions" / "strategies.yaml"


class StrategyRegistry:
    """Registry of presentation strategies loaded from YAML."""

    def __init__(self, definitions_file: Optional[Path] = None):
        self.definitions_file = definitions_file or DEFINITIONS_FILE
        self._strategies: dict[str, PresentationStrategy] = {}
        self._page_templates: dict[str, str] = {}
        self._loaded = False

    def load(self) -> None:
        """Load all strategy definitions.

        Malformed entries are logged and skipped. A strategy naming a
        presenter that does not exist is a deployment error and raises.
        """
        if self._loaded:
            return

        if not self.definitions_file.exists():
            logger.warning(f"Strategy definitions not found: {self.definitions_file}")
            self._loaded = True
            return

        with open(self.definitions_file) as f:
            data = yaml.safe_load(f) or {}

        for entry in data.get("strategies", []):
            try:
                strategy = PresentationStrategy.model_validate(entry)
            except Exception as e:
                logger.error(f"Failed to load strategy {entry.get('schema_name')}: {e}")
                continue

            if strategy.presenter not in PRESENTERS:
                raise ValueError(
                    f"Strategy '{strategy.schema_name}' names unknown presenter "
                    f"'{strategy.presenter}'. Available: {sorted(PRESENTERS)}"
                )
            self._strategies[strategy.schema_name] = strategy
            logger.debug(f"Loaded strategy: {strategy.schema_name}")

        for entry in data.get("page_templates", []):
            try:
                page = PageTemplate.model_validate(entry)
            except Exception as e:
                logger.error(f"Failed to load page template {entry.get('base_path')}: {e}")
                continue
            self._page_templates[page.base_path] = page.template_key

        self._loaded = True
        logger.info(
            f"Loaded {len(self._strategies)} presentation strategies "
            f"and {len(self._page_templates)} page templates"
        )

    def strategy_for(self, schema_name: Optional[str]) -> Optional[PresentationStrategy]:
        """Look up the strategy for a schema name; None when unknown or absent."""
        self.load()
        if not schema_name:
            return None
        return self._strategies.get(schema_name)

    def template_for_path(self, base_path: str) -> Optional[str]:
        """Fixed html template for one base path, whatever its schema; None when unset."""
        self.load()
        return self._page_templates.get(base_path)

    def list_keys(self) -> list[str]:
        self.load()
        return sorted(self._strategies)

    def list_summaries(self) -> list[StrategySummary]:
        self.load()
        return [
            StrategySummary(
                schema_name=s.schema_name,
                presenter=s.presenter,
                supported_formats=sorted(s.supported_formats),
            )
            for s in sorted(self._strategies.values(), key=lambda s: s.schema_name)
        ]

    def count(self) -> int:
        self.load()
        return len(self._strategies)

