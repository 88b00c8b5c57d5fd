"""Experiment override schemas.

An ExperimentOverride says: for requests whose assignment puts them in
``variant_id`` of ``experiment``, and whose base path falls in ``scope``,
substitute one thing. The substitution is one of:

- patches: dotted view paths patched with new values (e.g. ``parts.0.body``)
- template_key: render the page with a different template
- next_handler: route a follow-on form submission to a redirect target
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

GLOBAL_SCOPE = "global"


class ChoiceRedirect(BaseModel):
    """Redirect chosen by one submitted form field."""

    model_config = {"frozen": True}

    field: str = Field(..., description="Form field carrying the choice")
    choices: dict[str, str] = Field(
        default_factory=dict,
        description="Submitted value -> redirect target",
    )
    fallback: str = Field(..., description="Target when the choice is missing or unknown")

    def target_for(self, form: dict[str, str]) -> str:
        choice = form.get(self.field)
        if choice is None:
            return self.fallback
        return self.choices.get(choice, self.fallback)


class ExperimentOverride(BaseModel):
    """One substitution applied to one experiment arm."""

    model_config = {"frozen": True}

    experiment: str = Field(..., description="Experiment name (e.g. 'TrafficSignsSummary')")
    variant_id: str = Field(..., description="Arm this override applies to (e.g. 'B')")
    scope: str = Field(
        default=GLOBAL_SCOPE,
        description="'global', an exact base path, or a prefix ending in '*'",
    )
    patches: dict[str, Any] = Field(
        default_factory=dict,
        description="Dotted view path -> replacement value",
    )
    template_key: Optional[str] = None
    next_handler: Optional[ChoiceRedirect] = None

    @model_validator(mode="after")
    def _one_substitution(self) -> "ExperimentOverride":
        forms = [bool(self.patches), self.template_key is not None, self.next_handler is not None]
        if sum(forms) != 1:
            raise ValueError(
                f"Override for {self.experiment}/{self.variant_id} must define exactly one of "
                "patches, template_key or next_handler"
            )
        if self.scope != GLOBAL_SCOPE and not self.scope.startswith("/"):
            raise ValueError(f"Scope must be 'global' or an absolute path, got '{self.scope}'")
        return self

    def matches_path(self, base_path: str) -> bool:
        if self.scope == GLOBAL_SCOPE:
            return True
        if self.scope.endswith("*"):
            return base_path.startswith(self.scope[:-1])
        return base_path == self.scope

    def matches(self, assignments: dict[str, str], base_path: str) -> bool:
        """Both the path scope and the caller-supplied assignment must match."""
        return self.matches_path(base_path) and assignments.get(self.experiment) == self.variant_id
