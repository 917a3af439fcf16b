"""
Approval Gate - comment-driven approval decisions for review-gated items.

Scans the comment history of a pull request or issue, classifies comments
from authorized approvers, and folds them into one approved/denied/pending
decision.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
