from __future__ import annotations

from enum import Enum


class ThresholdStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class RuntimeMetric(str, Enum):
    LCP = "lcp"
    INP = "inp"
    CLS = "cls"
    TBT = "tbt"
    FCP = "fcp"

    @property
    def label(self) -> str:
        return self.value.upper()

    @property
    def unit(self) -> str:
        # CLS is a unitless score; everything else is milliseconds.
        return "" if self is RuntimeMetric.CLS else "ms"


class TreemapKind(str, Enum):
    BUNDLE = "bundle"
    CHUNK = "chunk"
    FILE = "file"


class Framework(str, Enum):
    NEXTJS = "nextjs"
    AUTO = "auto"


class AnalysisMode(str, Enum):
    DEEP = "deep"
    SIMPLE = "simple"


class LighthousePreset(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"


class Throttling(str, Enum):
    FAST_3G = "fast-3g"
    SLOW_4G = "slow-4g"
    OFFLINE = "offline"
