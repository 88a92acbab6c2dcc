# Typed configuration with field-level validation.
#
# Every from_dict fails closed: a wrong type, out-of-range number or unknown
# enum value raises ConfigError naming the offending field (dotted path, in
# the camelCase spelling used by the JSON file).

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from vantage.errors import ConfigError
from vantage.models.enums import AnalysisMode, Framework, LighthousePreset, RuntimeMetric, Throttling


def _mapping(data: Any, path: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigError(path, "expected an object")
    return data


def _number(
    data: dict[str, Any],
    key: str,
    path: str,
    default: float,
    minimum: float | None = None,
    maximum: float | None = None,
) -> float:
    raw = data.get(key, default)
    # bool is an int subclass; true/false is never a valid number here.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ConfigError(f"{path}.{key}", "expected a number")
    if minimum is not None and raw < minimum:
        raise ConfigError(f"{path}.{key}", f"must be >= {minimum:g}")
    if maximum is not None and raw > maximum:
        raise ConfigError(f"{path}.{key}", f"must be <= {maximum:g}")
    return float(raw)


def _string(data: dict[str, Any], key: str, path: str, default: str | None = None) -> str:
    raw = data.get(key, default)
    if not isinstance(raw, str):
        raise ConfigError(f"{path}.{key}", "expected a string")
    return raw


def _strings(data: dict[str, Any], key: str, path: str, min_items: int = 0) -> list[str]:
    raw = data.get(key, [])
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ConfigError(f"{path}.{key}", "expected a list of strings")
    if len(raw) < min_items:
        raise ConfigError(f"{path}.{key}", f"must contain at least {min_items} item(s)")
    return list(raw)


E = TypeVar("E", bound=Enum)


def _choice(data: dict[str, Any], key: str, path: str, enum: type[E], default: E) -> E:
    raw = data.get(key, default.value)
    try:
        return enum(raw)
    except ValueError:
        allowed = ", ".join(str(member.value) for member in enum)
        raise ConfigError(f"{path}.{key}", f"must be one of: {allowed}") from None


@dataclass(slots=True)
class BundleBudget:
    path: str
    max: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "max": self.max}

    @classmethod
    def from_dict(cls, payload: Any, path: str = "budget") -> BundleBudget:
        data = _mapping(payload, path)
        return cls(path=_string(data, "path", path), max=_string(data, "max", path))


@dataclass(slots=True)
class BundleThresholds:
    regression: float = 10.0
    warning: float = 5.0

    def to_dict(self) -> dict[str, Any]:
        return {"regression": self.regression, "warning": self.warning}

    @classmethod
    def from_dict(cls, payload: Any, path: str = "thresholds") -> BundleThresholds:
        data = _mapping(payload, path)
        defaults = cls()
        return cls(
            regression=_number(data, "regression", path, defaults.regression, 0, 100),
            warning=_number(data, "warning", path, defaults.warning, 0, 100),
        )


@dataclass(slots=True)
class RuntimeThresholds:
    """Absolute limits per metric; ``None`` disables the check."""

    lcp: float | None = None
    inp: float | None = None
    cls: float | None = None
    tbt: float | None = None
    fcp: float | None = None

    def get(self, metric: str) -> float | None:
        return getattr(self, RuntimeMetric(metric).value)

    def configured(self) -> list[RuntimeMetric]:
        return [metric for metric in RuntimeMetric if self.get(metric.value)]

    def to_dict(self) -> dict[str, Any]:
        return {metric.value: self.get(metric.value) for metric in RuntimeMetric if self.get(metric.value) is not None}

    @classmethod
    def from_dict(cls, payload: Any, path: str = "thresholds") -> RuntimeThresholds:
        data = _mapping(payload, path)
        values: dict[str, float | None] = {}
        for metric in RuntimeMetric:
            if data.get(metric.value) is None:
                values[metric.value] = None
            else:
                values[metric.value] = _number(data, metric.value, path, 0, minimum=0)
        return cls(**values)


@dataclass(slots=True)
class LighthouseSettings:
    number_of_runs: int = 3
    preset: LighthousePreset = LighthousePreset.DESKTOP
    throttling: Throttling = Throttling.FAST_3G

    def to_dict(self) -> dict[str, Any]:
        return {
            "numberOfRuns": self.number_of_runs,
            "preset": self.preset.value,
            "throttling": self.throttling.value,
        }

    @classmethod
    def from_dict(cls, payload: Any, path: str = "lighthouse") -> LighthouseSettings:
        data = _mapping(payload, path)
        defaults = cls()
        runs = _number(data, "numberOfRuns", path, defaults.number_of_runs, 1, 10)
        if runs != int(runs):
            raise ConfigError(f"{path}.numberOfRuns", "expected an integer")
        return cls(
            number_of_runs=int(runs),
            preset=_choice(data, "preset", path, LighthousePreset, defaults.preset),
            throttling=_choice(data, "throttling", path, Throttling, defaults.throttling),
        )


@dataclass(slots=True)
class RuntimeConfig:
    routes: list[str]
    thresholds: RuntimeThresholds = field(default_factory=RuntimeThresholds)
    exclude: list[str] = field(default_factory=list)
    lighthouse: LighthouseSettings = field(default_factory=LighthouseSettings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "routes": list(self.routes),
            "exclude": list(self.exclude),
            "thresholds": self.thresholds.to_dict(),
            "lighthouse": self.lighthouse.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Any, path: str = "runtime") -> RuntimeConfig:
        data = _mapping(payload, path)
        if "thresholds" not in data:
            raise ConfigError(f"{path}.thresholds", "is required")
        lighthouse_raw = data.get("lighthouse")
        return cls(
            routes=_strings(data, "routes", path, min_items=1),
            exclude=_strings(data, "exclude", path),
            thresholds=RuntimeThresholds.from_dict(data["thresholds"], f"{path}.thresholds"),
            lighthouse=(
                LighthouseSettings.from_dict(lighthouse_raw, f"{path}.lighthouse")
                if lighthouse_raw is not None
                else LighthouseSettings()
            ),
        )


@dataclass(slots=True)
class BundleConfig:
    analysis: AnalysisMode = AnalysisMode.DEEP
    output_dir: str = ".next"
    treemap: bool = True
    budgets: list[BundleBudget] = field(default_factory=list)
    thresholds: BundleThresholds = field(default_factory=BundleThresholds)
    ignore: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis": self.analysis.value,
            "outputDir": self.output_dir,
            "treemap": self.treemap,
            "budgets": [budget.to_dict() for budget in self.budgets],
            "thresholds": self.thresholds.to_dict(),
            "ignore": list(self.ignore),
        }

    @classmethod
    def from_dict(cls, payload: Any, path: str = "bundle") -> BundleConfig:
        data = _mapping(payload, path)
        defaults = cls()
        if "thresholds" not in data:
            raise ConfigError(f"{path}.thresholds", "is required")

        budgets_raw = data.get("budgets", [])
        if not isinstance(budgets_raw, list):
            raise ConfigError(f"{path}.budgets", "expected a list")

        treemap = data.get("treemap", defaults.treemap)
        if not isinstance(treemap, bool):
            raise ConfigError(f"{path}.treemap", "expected a boolean")

        return cls(
            analysis=_choice(data, "analysis", path, AnalysisMode, defaults.analysis),
            output_dir=_string(data, "outputDir", path, defaults.output_dir),
            treemap=treemap,
            budgets=[BundleBudget.from_dict(item, f"{path}.budgets[{i}]") for i, item in enumerate(budgets_raw)],
            thresholds=BundleThresholds.from_dict(data["thresholds"], f"{path}.thresholds"),
            ignore=_strings(data, "ignore", path),
        )


@dataclass(slots=True)
class VantageConfig:
    framework: Framework = Framework.AUTO
    bundle: BundleConfig = field(default_factory=BundleConfig)
    runtime: RuntimeConfig | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "framework": self.framework.value,
            "bundle": self.bundle.to_dict(),
        }
        if self.runtime is not None:
            payload["runtime"] = self.runtime.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: Any) -> VantageConfig:
        data = _mapping(payload, "config")
        if "bundle" not in data:
            raise ConfigError("bundle", "is required")
        runtime_raw = data.get("runtime")
        return cls(
            framework=_choice(data, "framework", "config", Framework, Framework.AUTO),
            bundle=BundleConfig.from_dict(data["bundle"]),
            runtime=RuntimeConfig.from_dict(runtime_raw) if runtime_raw is not None else None,
        )
