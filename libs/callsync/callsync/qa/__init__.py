"""QA review: note binding and scoring workflow."""

from callsync.qa.annotations import AnnotationBinding
from callsync.qa.review import QAReview, ReviewSink, weighted_score

__all__ = ["AnnotationBinding", "QAReview", "ReviewSink", "weighted_score"]
