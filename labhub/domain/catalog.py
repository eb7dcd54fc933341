from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from .models import TestResultStatus


@dataclass(frozen=True)
class AssaySpec:
    name: str
    unit: str
    draw_low: float
    draw_high: float
    precision: int  # decimal places; 0 => integer values
    normal_low: Optional[float] = None  # None => unbounded
    normal_high: Optional[float] = None
    high_exclusive: bool = False

    def round_value(self, raw: float) -> Union[float, int]:
        if self.precision == 0:
            return int(round(raw))
        return round(raw, self.precision)

    def is_normal(self, value: Union[float, int]) -> bool:
        if self.normal_low is not None and value < self.normal_low:
            return False
        if self.normal_high is not None:
            if self.high_exclusive:
                return value < self.normal_high
            return value <= self.normal_high
        return True

    def classify(self, value: Union[float, int]) -> TestResultStatus:
        return TestResultStatus.NORMAL if self.is_normal(value) else TestResultStatus.ABNORMAL


# Order matters: selection is uniform over this tuple.
ASSAY_CATALOG: tuple[AssaySpec, ...] = (
    AssaySpec("Hemoglobin", "g/dL", 12, 18, 1, normal_low=12, normal_high=17),
    AssaySpec("Glucose", "mg/dL", 70, 120, 1, normal_low=70, normal_high=100),
    AssaySpec("Cholesterol", "mg/dL", 150, 250, 1, normal_high=200, high_exclusive=True),
    AssaySpec("White Blood Cell Count", "cells/µL", 4000, 10000, 0, normal_low=4000, normal_high=11000),
    AssaySpec("Platelet Count", "cells/µL", 150000, 350000, 0, normal_low=150000, normal_high=450000),
    AssaySpec("Creatinine", "mg/dL", 0.6, 1.8, 2, normal_high=1.2),
    AssaySpec("ALT", "U/L", 7, 47, 1, normal_high=40),
    AssaySpec("AST", "U/L", 10, 45, 1, normal_high=40),
)

ASSAYS_BY_NAME: dict[str, AssaySpec] = {a.name: a for a in ASSAY_CATALOG}
