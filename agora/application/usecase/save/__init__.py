"""Save use cases."""

from .list_saved import ListSavedRequest, ListSavedUseCase
from .save import SaveRequest, SaveResponse, SaveUseCase
from .unsave import UnsaveRequest, UnsaveUseCase

__all__ = [
    "ListSavedRequest",
    "ListSavedUseCase",
    "SaveRequest",
    "SaveResponse",
    "SaveUseCase",
    "UnsaveRequest",
    "UnsaveUseCase",
]
