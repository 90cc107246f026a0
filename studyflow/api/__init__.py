"""
API module exposing the REST interface.
"""

from .rest_api import StudyFlowRestAPI

__all__ = [
    "StudyFlowRestAPI",
]
