"""
Project config model — the validated input to a generation run.

Loaded from lattice.yml (or lattice.json) by the config loader.
Once built, a ProjectConfig is frozen: the engine only ever reads it.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ProjectType = Literal["expo-eas", "nextjs"]
StrictnessPreset = Literal["startup", "pro", "enterprise"]
TestingLevel = Literal["none", "unit", "unit-e2e"]
BillingProvider = Literal["none", "revenuecat", "stripe"]
AnalyticsProvider = Literal["none", "amplitude", "mixpanel", "posthog"]
ObservabilityProvider = Literal["none", "sentry"]


class ProjectConfig(BaseModel):
    """What to generate.

    Field names are snake_case in Python; the camelCase spelling
    (``projectType``, ``strictnessPreset``, ...) is accepted on input
    so the same config file works for every surface.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    project_type: ProjectType
    backend: Literal["supabase"] | None = None
    package_manager: Literal["npm"] = "npm"
    strictness_preset: StrictnessPreset = "startup"
    testing_level: TestingLevel = "none"
    billing_provider: BillingProvider = "none"
    analytics_provider: AnalyticsProvider = "none"
    observability: ObservabilityProvider = "none"
