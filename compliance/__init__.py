from .classifier import ComplianceStatus, ComplianceClassifier, classify_driver

__all__ = [
    "ComplianceStatus",
    "ComplianceClassifier",
    "classify_driver",
]
