"""
Registration Visualization Tools

Renders the registered scene (merged beacons and scanner positions) with Plotly.
"""

from typing import Optional, Sequence

import plotly.graph_objects as go

from ..alignment.aggregation import global_beacons
from ..alignment.scanner import SolvedScanner
from ..utils.geometry import points_to_array


class RegistrationVisualizer:
    """Builds interactive 3D views of solved scanners and their beacons."""

    def __init__(self, show_scanners: bool = True, marker_size: int = 3):
        self.show_scanners = show_scanners
        self.marker_size = marker_size

    # ----------------- Public API -----------------
    def build_figure(self, solved: Sequence[SolvedScanner], title: str = "Registered beacons") -> go.Figure:
        if not solved:
            raise ValueError("Nothing to visualize: no solved scanners")

        beacons = points_to_array(global_beacons(solved))
        fig = go.Figure()
        fig.add_trace(go.Scatter3d(
            x=beacons[:, 0], y=beacons[:, 1], z=beacons[:, 2],
            mode='markers',
            marker=dict(size=self.marker_size),
            name=f"beacons ({len(beacons)})",
        ))
        if self.show_scanners:
            positions = points_to_array(s.position for s in solved)
            fig.add_trace(go.Scatter3d(
                x=positions[:, 0], y=positions[:, 1], z=positions[:, 2],
                mode='markers+text',
                marker=dict(size=self.marker_size * 2, symbol='diamond'),
                text=[str(s.scanner_id) for s in solved],
                name=f"scanners ({len(solved)})",
            ))
        fig.update_layout(
            title=title,
            scene=dict(aspectmode='data'),
            margin=dict(l=0, r=0, t=40, b=0),
        )
        return fig

    def show(self, solved: Sequence[SolvedScanner], title: str = "Registered beacons"):
        self.build_figure(solved, title=title).show(renderer="browser")

    def write_html(self, solved: Sequence[SolvedScanner], output_path: str,
                   title: Optional[str] = None) -> str:
        fig = self.build_figure(solved, title=title or "Registered beacons")
        fig.write_html(output_path)
        return output_path
