"""
shapestat CLI - Command-line interface for shape scenes.

Usage:
    shapestat describe config/scene.yaml
    shapestat stats config/scene.yaml
    shapestat stats config/scene.yaml --deferred
    shapestat stats config/scene.yaml --publish
"""

__version__ = "1.0.0"
