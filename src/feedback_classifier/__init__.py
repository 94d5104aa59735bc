"""
feedback-classifier: command-line text-feedback triage.

Scores each line of user feedback with a remote sentiment model and a
remote zero-shot intent model, then folds both into a single feedback
bucket (complaint, bug report, refund/cancellation, ...).
"""

from feedback_classifier.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
