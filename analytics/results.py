"""
Result Collection and Summary Module
====================================

This module holds the shared result collector that every annotation pass
reports into, and turns the collected results into pandas tables.
"""

import threading
from typing import List, Optional, Tuple

import pandas as pd

from models.annotation_models import CollectedResult

DEFAULT_PASSING_SCORE = 1.0

RESULT_COLUMNS = ["Pass", "Test", "Score"]


class ResultCollector:
    """
    Append-only collector of (name, score) results across passes.
    Safe to share between threads; passes only ever call add().
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._results: List[CollectedResult] = []

    def add(self, name: str, score: float, pass_name: Optional[str] = None):
        with self._lock:
            self._results.append(CollectedResult(pass_name=pass_name, name=name, score=score))

    @property
    def results(self) -> Tuple[CollectedResult, ...]:
        with self._lock:
            return tuple(self._results)

    def clear(self):
        with self._lock:
            self._results.clear()

    def __len__(self):
        with self._lock:
            return len(self._results)

    def to_frame(self) -> pd.DataFrame:
        """One row per reported result, in the order they were added."""
        rows = [
            {"Pass": r.pass_name, "Test": r.name, "Score": r.score}
            for r in self.results
        ]
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def summary(self, passing_score: float = DEFAULT_PASSING_SCORE) -> pd.DataFrame:
        """
        Aggregates results per pass:
        1. Number of tests reported
        2. Total and mean score
        3. Number of tests scoring below the passing score
        """
        df = self.to_frame()
        if df.empty:
            return pd.DataFrame(columns=["Tests", "Total Score", "Mean Score", "Failed"])

        df["Pass"] = df["Pass"].fillna("")
        df["Failed"] = df["Score"] < passing_score
        grouped = df.groupby("Pass", sort=False)

        return pd.DataFrame({
            "Tests": grouped["Test"].count(),
            "Total Score": grouped["Score"].sum(),
            "Mean Score": grouped["Score"].mean(),
            "Failed": grouped["Failed"].sum().astype(int),
        })

    def failing_tests(self, passing_score: float = DEFAULT_PASSING_SCORE) -> pd.Series:
        """Scores of the tests below the passing score, lowest first."""
        df = self.to_frame()
        failing = df[df["Score"] < passing_score]
        if failing.empty:
            return pd.Series(dtype=float)

        return failing.set_index("Test")["Score"].sort_values(kind="stable")
