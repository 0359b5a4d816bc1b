import enum
from typing import Dict, Optional, Tuple


class RiskLevel(str, enum.Enum):
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    SCAM = "scam"


DEFAULTS = {'suspicious': 0.30, 'scam': 0.70}


def risk_level(score: float, thresholds: Optional[Dict[str, float]] = None) -> RiskLevel:
    thr = {**DEFAULTS, **(thresholds or {})}
    if score >= thr['scam']:
        return RiskLevel.SCAM
    if score >= thr['suspicious']:
        return RiskLevel.SUSPICIOUS
    return RiskLevel.SAFE


def decide_action(score: float, thresholds: Optional[Dict[str, float]] = None) -> Tuple[bool, Dict]:
    thr = {**DEFAULTS, **(thresholds or {})}
    level = risk_level(score, thr)
    flagged = level is not RiskLevel.SAFE
    return flagged, {'score': score, 'level': level.value, 'thresholds': thr}
