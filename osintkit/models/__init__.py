from .requests import ScanRequest
from .responses import ClassifyResponse, ErrorResponse, HealthResponse
from .findings import (
    InputType, ScanDepth, SourceResult, ScanData,
    EmailFindings, DomainFindings, IPFindings, UsernameFindings,
)
from .report import (
    OSINTResult, RiskFactors, TimelineEvent, GeolocationRecord,
    DarkWebExposure, MitreTechnique, SimilarTarget, ReportMetadata,
)

__all__ = [
    "ScanRequest", "ClassifyResponse", "ErrorResponse", "HealthResponse",
    "InputType", "ScanDepth", "SourceResult", "ScanData",
    "EmailFindings", "DomainFindings", "IPFindings", "UsernameFindings",
    "OSINTResult", "RiskFactors", "TimelineEvent", "GeolocationRecord",
    "DarkWebExposure", "MitreTechnique", "SimilarTarget", "ReportMetadata",
]
