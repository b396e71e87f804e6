"""
Scoring service: transcript -> Scoring Engine -> Feedback Engine -> narrator fields.
"""

__version__ = "0.1.0"
