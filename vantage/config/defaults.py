from __future__ import annotations

from vantage.config.schema import BundleConfig, BundleThresholds, VantageConfig
from vantage.models.enums import AnalysisMode, Framework


def default_config() -> VantageConfig:
    return VantageConfig(
        framework=Framework.NEXTJS,
        bundle=BundleConfig(
            analysis=AnalysisMode.DEEP,
            output_dir=".next",
            treemap=True,
            budgets=[],
            thresholds=BundleThresholds(regression=10.0, warning=5.0),
            ignore=[],
        ),
    )
