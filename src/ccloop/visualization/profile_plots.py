# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Profile and Response Plots

Interactive Plotly figures for motion profiles and recorded control loop
runs. Functions only build figures; showing or saving them is up to the
caller.

Main Class
----------
ProfilePlotter : Motion profile and loop response plotting
    plot_profile() : Position, velocity, acceleration with phase markers
    plot_response() : Tracking and output of a recorded run

Usage
-----
>>> plotter = ProfilePlotter()
>>> profile = TrapezoidProfile(TrapezoidProfileParameters(2.0, 1.0), KineticState(10.0))
>>> fig = plotter.plot_profile(profile, theme='publication')
>>> fig.write_html('profile.html')
"""

from typing import Optional

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ccloop.interpolators.trapezoid import TrapezoidProfile
from ccloop.types.core import ArrayLike
from ccloop.visualization.themes import ColorSchemes, PlotThemes


class ProfilePlotter:
    """
    Plotting for motion profiles and control loop responses.

    Attributes
    ----------
    default_theme : str
        Theme applied when a method is called with theme=None
    """

    def __init__(self, default_theme: str = "default"):
        """
        Initialize profile plotter.

        Parameters
        ----------
        default_theme : str
            Options: 'default', 'publication', 'dark', 'presentation'
        """
        self.default_theme = default_theme

    # =========================================================================
    # Main Plotting Methods
    # =========================================================================

    def plot_profile(
        self,
        profile: TrapezoidProfile,
        t_final: Optional[float] = None,
        n_points: int = 200,
        show_phases: bool = True,
        title: str = "Trapezoid Profile",
        theme: Optional[str] = None,
    ) -> go.Figure:
        """
        Plot a trapezoid profile's position, velocity and acceleration.

        Parameters
        ----------
        profile : TrapezoidProfile
            Profile with its goal set
        t_final : Optional[float]
            End of the time axis (s). Defaults to the profile duration, or
            1 s for a profile that never moves.
        n_points : int
            Number of samples
        show_phases : bool
            Mark the end of acceleration, start of deceleration and end of
            the profile with dotted vertical lines
        title : str
            Plot title
        theme : Optional[str]
            Plot theme; None uses self.default_theme

        Returns
        -------
        go.Figure
            Three stacked subplots sharing the time axis

        Examples
        --------
        >>> fig = plotter.plot_profile(profile, t_final=8.0)
        >>> len(fig.data)
        3
        """
        if theme is None:
            theme = self.default_theme

        timings = profile.timings
        if t_final is None:
            t_final = timings["duration"] if timings["duration"] > 0 else 1.0

        sample = profile.sample(np.linspace(0.0, t_final, n_points))

        fig = make_subplots(
            rows=3,
            cols=1,
            shared_xaxes=True,
            subplot_titles=("Position", "Velocity", "Acceleration"),
            vertical_spacing=0.08,
        )

        for row, channel in enumerate(("position", "velocity", "acceleration"), start=1):
            fig.add_trace(
                go.Scatter(
                    x=sample["t"],
                    y=sample[channel],
                    mode="lines",
                    name=channel.capitalize(),
                    line=dict(
                        color=ColorSchemes.CHANNELS[channel],
                        width=2,
                        shape="hv" if channel == "acceleration" else "linear",
                    ),
                ),
                row=row,
                col=1,
            )

        if show_phases and timings["duration"] > 0:
            for t_phase in (timings["t_accel"], timings["t_decel_start"], timings["duration"]):
                fig.add_vline(
                    x=t_phase,
                    line=dict(color="gray", width=1, dash="dot"),
                    row="all",
                    col=1,
                )

        fig.update_xaxes(title_text="Time (s)", row=3, col=1)
        fig.update_layout(
            title=title,
            width=800,
            height=750,
            showlegend=False,
        )

        fig = PlotThemes.apply_theme(fig, theme=theme)

        return fig

    def plot_response(
        self,
        t: ArrayLike,
        output: ArrayLike,
        reference: Optional[ArrayLike] = None,
        measurement: Optional[ArrayLike] = None,
        title: str = "Control Loop Response",
        theme: Optional[str] = None,
    ) -> go.Figure:
        """
        Plot a recorded control loop run.

        Parameters
        ----------
        t : ArrayLike
            Tick times (T,)
        output : ArrayLike
            Power returned by ControlSystem.calculate at each tick (T,)
        reference : Optional[ArrayLike]
            Reference position at each tick (T,)
        measurement : Optional[ArrayLike]
            Filtered measured position at each tick (T,)
        title : str
            Plot title
        theme : Optional[str]
            Plot theme; None uses self.default_theme

        Returns
        -------
        go.Figure
            Tracking subplot above, output subplot below

        Raises
        ------
        ValueError
            If any series length differs from t

        Examples
        --------
        >>> results = [system.calculate_detailed(m) for m in measurements]
        >>> fig = plotter.plot_response(
        ...     t,
        ...     [r['output'] for r in results],
        ...     reference=[r['reference'].position for r in results],
        ...     measurement=[r['measurement'].position for r in results],
        ... )
        """
        if theme is None:
            theme = self.default_theme

        t_np = np.asarray(t, dtype=float).reshape(-1)
        series = {"output": output, "reference": reference, "measurement": measurement}
        arrays = {}
        for name, values in series.items():
            if values is None:
                continue
            arr = np.asarray(values, dtype=float).reshape(-1)
            if arr.shape != t_np.shape:
                raise ValueError(
                    f"{name} has {arr.size} samples but t has {t_np.size}"
                )
            arrays[name] = arr

        fig = make_subplots(
            rows=2,
            cols=1,
            shared_xaxes=True,
            subplot_titles=("Tracking", "Output"),
            vertical_spacing=0.1,
        )

        if "reference" in arrays:
            fig.add_trace(
                go.Scatter(
                    x=t_np,
                    y=arrays["reference"],
                    mode="lines",
                    name="Reference",
                    line=dict(color=ColorSchemes.CHANNELS["reference"], width=2, dash="dash"),
                ),
                row=1,
                col=1,
            )
        if "measurement" in arrays:
            fig.add_trace(
                go.Scatter(
                    x=t_np,
                    y=arrays["measurement"],
                    mode="lines",
                    name="Measurement",
                    line=dict(color=ColorSchemes.CHANNELS["position"], width=2),
                ),
                row=1,
                col=1,
            )

        fig.add_trace(
            go.Scatter(
                x=t_np,
                y=arrays["output"],
                mode="lines",
                name="Output",
                line=dict(color=ColorSchemes.CHANNELS["output"], width=2),
            ),
            row=2,
            col=1,
        )

        fig.update_xaxes(title_text="Time (s)", row=2, col=1)
        fig.update_yaxes(title_text="Position", row=1, col=1)
        fig.update_yaxes(title_text="Power", row=2, col=1)
        fig.update_layout(
            title=title,
            width=800,
            height=600,
            showlegend=True,
        )

        fig = PlotThemes.apply_theme(fig, theme=theme)

        return fig
