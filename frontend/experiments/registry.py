"""Registry for experiment overrides.

Loads override definitions from YAML once and serves them read-only in
registration order.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from .schemas import ExperimentOverride

logger = logging.getLogger(__name__)

DEFINITIONS_FILE = Path(__file__).parent / "definitions" / "experiments.yaml"


class ExperimentRegistry:
    """Loads and serves experiment override definitions."""

    def __init__(self, definitions_file: Optional[Path] = None) -> None:
        self.definitions_file = definitions_file or DEFINITIONS_FILE
        self._overrides: list[ExperimentOverride] = []
        self._load_overrides()

    def _load_overrides(self) -> None:
        """Load overrides from the YAML file."""
        if not self.definitions_file.exists():
            logger.warning(f"Experiments file not found: {self.definitions_file}")
            return

        with open(self.definitions_file) as f:
            data = yaml.safe_load(f) or {}

        for override_data in data.get("overrides", []):
            try:
                override = ExperimentOverride(**override_data)
                self._overrides.append(override)
                logger.debug(
                    f"Loaded override: {override.experiment}/{override.variant_id} on {override.scope}"
                )
            except Exception as e:
                logger.error(f"Failed to load experiment override: {e}")

        logger.info(
            f"Loaded {len(self._overrides)} overrides for "
            f"{len(self.experiment_names())} experiments"
        )

    def list_all(self) -> list[ExperimentOverride]:
        return list(self._overrides)

    def experiment_names(self) -> list[str]:
        return sorted({o.experiment for o in self._overrides})

    @property
    def count(self) -> int:
        return len(self._overrides)

