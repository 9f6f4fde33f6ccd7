"""Data module for dataset classes."""

from .fetch import fetch_dataset
from .morphometry_columns import MorphometryColumn as MCol
from .morphometry_dataset import MorphometryDataset
from .relationship import RelationshipKind
from .views import DatasetView


__all__ = ["DatasetView", "MCol", "MorphometryDataset", "RelationshipKind", "fetch_dataset"]
