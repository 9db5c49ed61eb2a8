"""Image analysis client used by the checklist runner's scan fields."""
from checkmaster.ai.client import ScanOutcome, VehicleImageAnalyzer

__all__ = ["ScanOutcome", "VehicleImageAnalyzer"]
