"""
Visualization Module

This module renders registration results using Plotly.
"""

from .point_cloud import RegistrationVisualizer

__all__ = [
    "RegistrationVisualizer",
]
