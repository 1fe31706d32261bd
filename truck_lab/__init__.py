"""
Truck Lab - Course Components

This package contains:
- pickup_vehicle / ground / orbit_camera / scene: the interactive pickup scene
- rendering: pygame window and OpenGL drawing
- vision: OpenCV exercises (warp, pyramids, Gabor, edges, keypoints)
- utils: Utility functions

Entry points: scene_main.py (pickup scene), exercises_main.py (vision exercises)
"""

__version__ = "1.0.0"
