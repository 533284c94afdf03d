"""
services/
---------
External collaborators, kept at the edge of the app.

    from services import ExplanationClient, ExplanationServiceError, FeedbackStore
"""

from services.explanation import ExplanationClient, ExplanationServiceError, build_prompt
from services.feedback    import FeedbackStore, FEEDBACK_VALUES

__all__ = [
    "ExplanationClient",
    "ExplanationServiceError",
    "build_prompt",
    "FeedbackStore",
    "FEEDBACK_VALUES",
]
