"""
Utility helpers (visual debugging for the vision exercises).
"""

from .debug_visualizer import ExerciseViewer, ViewerConfig

__all__ = ['ExerciseViewer', 'ViewerConfig']
