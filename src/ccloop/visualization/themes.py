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
Plotting Themes and Channel Colors

Styling shared by the control loop plots.

Main Classes
------------
ColorSchemes : Fixed color per plotted series
    CHANNELS : position, velocity, acceleration, reference, output

PlotThemes : Complete theme configurations
    DEFAULT, PUBLICATION, DARK, PRESENTATION

Usage
-----
>>> from ccloop.visualization.themes import ColorSchemes, PlotThemes
>>>
>>> fig = PlotThemes.apply_theme(plotter.plot_profile(profile), theme='publication')
>>> fig.data[1].line.color == ColorSchemes.CHANNELS['velocity']
True
"""

from typing import Dict, Union

import plotly.graph_objects as go


class ColorSchemes:
    """
    Series colors for plotting.

    Attributes
    ----------
    CHANNELS : Dict[str, str]
        Color for each KineticState channel and for the reference and
        output series, so a channel looks the same in every plot

    Examples
    --------
    >>> ColorSchemes.CHANNELS['velocity']
    '#EF553B'
    """

    CHANNELS = {
        "position": "#636EFA",
        "velocity": "#EF553B",
        "acceleration": "#00CC96",
        "reference": "#7f7f7f",
        "output": "#AB63FA",
    }


class PlotThemes:
    """
    Complete plotting theme configurations.

    Attributes
    ----------
    DEFAULT : dict
        Standard Plotly white theme
    PUBLICATION : dict
        Clean, high-contrast styling
    DARK : dict
        Dark mode theme
    PRESENTATION : dict
        Large fonts and thick lines

    Examples
    --------
    >>> custom = PlotThemes.DEFAULT.copy()
    >>> custom['font_size'] = 16
    >>> fig = PlotThemes.apply_theme(fig, theme=custom)
    """

    DEFAULT = {
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "line_width": 2,
    }

    PUBLICATION = {
        "template": "simple_white",
        "font_family": "Times New Roman, serif",
        "font_size": 14,
        "line_width": 2.5,
        "showlegend": True,
    }

    DARK = {
        "template": "plotly_dark",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "line_width": 2,
    }

    PRESENTATION = {
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 18,
        "line_width": 3,
    }

    @staticmethod
    def get(theme: str) -> Dict:
        """
        Look up a named theme.

        Raises
        ------
        ValueError
            If the name is not one of default, publication, dark, presentation
        """
        themes = {
            "default": PlotThemes.DEFAULT,
            "publication": PlotThemes.PUBLICATION,
            "dark": PlotThemes.DARK,
            "presentation": PlotThemes.PRESENTATION,
        }
        try:
            return themes[theme.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown theme '{theme}'. Available: default, publication, dark, presentation"
            ) from None

    @staticmethod
    def apply_theme(fig: go.Figure, theme: Union[str, Dict] = "default") -> go.Figure:
        """
        Apply a theme to a Plotly figure in place.

        Parameters
        ----------
        fig : go.Figure
            Plotly figure to style
        theme : str or dict
            Theme name ('default', 'publication', 'dark', 'presentation')
            or custom theme dictionary

        Returns
        -------
        go.Figure
            The styled figure

        Raises
        ------
        ValueError
            If a theme name is not recognized
        TypeError
            If theme is neither a str nor a dict
        """
        if isinstance(theme, str):
            config = PlotThemes.get(theme)
        elif isinstance(theme, dict):
            config = theme
        else:
            raise TypeError("theme must be str or dict")

        if "template" in config:
            fig.update_layout(template=config["template"])

        if "font_family" in config or "font_size" in config:
            font = {}
            if "font_family" in config:
                font["family"] = config["font_family"]
            if "font_size" in config:
                font["size"] = config["font_size"]
            fig.update_layout(font=font)

        if "showlegend" in config:
            fig.update_layout(showlegend=config["showlegend"])

        if "line_width" in config:
            for trace in fig.data:
                if hasattr(trace, "line"):
                    trace.line.width = config["line_width"]

        return fig
