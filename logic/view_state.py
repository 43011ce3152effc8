"""Selection of the results-area view."""

from __future__ import annotations

from enum import Enum


class ResultsView(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    RESULT = "result"


def select_results_view(has_recommendation: bool, is_loading: bool) -> ResultsView:
    """Loading wins while a request is outstanding; otherwise a result shows if one exists."""

    if is_loading:
        return ResultsView.LOADING
    if has_recommendation:
        return ResultsView.RESULT
    return ResultsView.EMPTY


__all__ = ["ResultsView", "select_results_view"]
