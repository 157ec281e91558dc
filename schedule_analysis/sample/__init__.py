"""Sample data generation."""

from .generator import SnapshotGenerator

__all__ = ['SnapshotGenerator']
