"""Base analyzer class for the statistical stages of the toolbox."""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyser(ABC):
    """Common interface of the residual outlier detector and the ANCOVA tester.

    An analyzer is built from a :class:`~lwr_tlbx.data.views.DatasetView`,
    computes in :meth:`fit` (returning ``self`` so calls chain) and hands back a
    frozen dataclass from :meth:`result`. The view's frame is never modified;
    filtered rows are returned as new frames by the callers that consume the result.

    Example:
        >>> detector = dataset.make_outlier_detector(RelationshipKind.LLR)
        >>> detector.fit().result().n_outliers
        2

    Plotting helpers in ``lwr_tlbx.plotting`` take the ``*Result`` dataclass and
    return a matplotlib ``Figure``.
    """

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Run the analysis on the view.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return the analysis outcome as a frozen dataclass instance.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...
