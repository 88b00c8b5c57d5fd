"""Experiment dispatcher — applies overrides to a presented page.

Pure and deterministic: the same assignment, base path and view always give
the same result. Bucketing happens upstream; the assignment arrives with
the request.
"""

import logging
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from frontend.presenters.schemas import PageView
from .schemas import ExperimentOverride

logger = logging.getLogger(__name__)

ABTEST_HEADER_PREFIX = "GOVUK-ABTest-"


def header_for(experiment: str) -> str:
    return f"{ABTEST_HEADER_PREFIX}{experiment}"


def _set_path(data: Any, path: list[str], value: Any) -> bool:
    """Set ``value`` at a dotted path inside nested dicts/lists; False if the path is missing."""
    current = data
    for step in path[:-1]:
        if isinstance(current, list):
            if not step.isdigit() or int(step) >= len(current):
                return False
            current = current[int(step)]
        elif isinstance(current, dict):
            if step not in current or current[step] is None:
                return False
            current = current[step]
        else:
            return False

    last = path[-1]
    if isinstance(current, list):
        if not last.isdigit() or int(last) >= len(current):
            return False
        current[int(last)] = value
        return True
    if isinstance(current, dict):
        current[last] = value
        return True
    return False


def patch_view(view: PageView, patches: dict[str, Any]) -> PageView:
    """Return a copy of ``view`` with dotted-path fields replaced.

    Paths that do not exist in the view are skipped with a warning.
    """
    data = view.model_dump()
    for dotted, value in patches.items():
        if not _set_path(data, dotted.split("."), value):
            logger.warning(f"Override path '{dotted}' not present on {view.base_path}")
    return PageView.model_validate(data)


class ExperimentDispatcher:
    """Applies registered overrides for the experiment arms a request is in."""

    def __init__(self, overrides: Sequence[ExperimentOverride]):
        self._overrides = tuple(overrides)

    def applicable(self, assignments: dict[str, str], base_path: str) -> list[ExperimentOverride]:
        """Overrides whose scope and variant both match, in registration order."""
        return [o for o in self._overrides if o.matches(assignments, base_path)]

    def experiments_for(self, base_path: str) -> list[str]:
        """Experiments with any override scoped to this path, for Vary headers."""
        names: list[str] = []
        for override in self._overrides:
            if override.matches_path(base_path) and override.experiment not in names:
                names.append(override.experiment)
        return names

    def vary_headers(self, base_path: str) -> list[str]:
        return [header_for(name) for name in self.experiments_for(base_path)]

    def apply(self, assignments: dict[str, str], base_path: str, view: PageView) -> PageView:
        """Apply field and template substitutions; unchanged view when nothing matches."""
        result = view
        for override in self.applicable(assignments, base_path):
            if override.patches:
                try:
                    result = patch_view(result, override.patches)
                except ValidationError as e:
                    logger.error(
                        f"Override {override.experiment}/{override.variant_id} produced "
                        f"an invalid view for {base_path}: {e}"
                    )
                    continue
            elif override.template_key:
                result = result.model_copy(update={"template_key": override.template_key})
            else:
                continue
            logger.debug(f"Applied {override.experiment}/{override.variant_id} to {base_path}")
        return result

    def resolve_next_handler(
        self,
        base_path: str,
        assignments: dict[str, str],
        form: dict[str, str],
    ) -> Optional[str]:
        """Redirect target for a follow-on form submission, or None when no handler applies."""
        for override in self.applicable(assignments, base_path):
            if override.next_handler is not None:
                return override.next_handler.target_for(form)
        return None
