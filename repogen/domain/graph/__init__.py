"""Manifest dependency graph ordering."""

from .dependency_sorter import VisitState, sort_manifest

__all__ = ["VisitState", "sort_manifest"]
