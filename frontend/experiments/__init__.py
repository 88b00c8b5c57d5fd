"""Experiment overrides that swap page content for requests in an experiment arm."""

from .dispatcher import ABTEST_HEADER_PREFIX, ExperimentDispatcher, header_for, patch_view
from .registry import ExperimentRegistry
from .schemas import GLOBAL_SCOPE, ChoiceRedirect, ExperimentOverride

__all__ = [
    "ABTEST_HEADER_PREFIX",
    "ChoiceRedirect",
    "ExperimentDispatcher",
    "ExperimentOverride",
    "ExperimentRegistry",
    "GLOBAL_SCOPE",
    "header_for",
    "patch_view",
]
