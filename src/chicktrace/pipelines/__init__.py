"""
Pipelines Package

Timeline classification and current-state snapshot over normalized history.
"""
from src.chicktrace.pipelines.snapshot import build_snapshot, select_current_state
from src.chicktrace.pipelines.stage_classifier import StageClassifier

__all__ = ["StageClassifier", "build_snapshot", "select_current_state"]
