"""OSINT package."""

from .modules import SourceAdapter, SourceRequest
from .classifier import classify, validate_input, require_target
from osintkit.errors import (
    OSINTError,
    TargetValidationError,
    ConfigurationError,
    TransportError,
    RateLimitExceeded,
    ScanInProgressError,
)
from .orchestrator import ScanOrchestrator, ScanState, scan
from .risk import calculate_risk_factors, calculate_threat_score, threat_level
from .simulation import SimulationGenerator
from .timeline import build_timeline

__all__ = [
    "SourceAdapter",
    "SourceRequest",
    "classify",
    "validate_input",
    "require_target",
    "OSINTError",
    "TargetValidationError",
    "ConfigurationError",
    "TransportError",
    "RateLimitExceeded",
    "ScanInProgressError",
    "ScanOrchestrator",
    "ScanState",
    "scan",
    "calculate_risk_factors",
    "calculate_threat_score",
    "threat_level",
    "SimulationGenerator",
    "build_timeline",
]
