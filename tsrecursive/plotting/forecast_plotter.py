# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from pydantic import BaseModel


class ForecastPlotter(BaseModel):
    colormap: str = "Plotly"
    stroke_width: float = 1.5
    forecast_dash: str = "dash"

    title: str = "Forecast vs Actual"
    xaxis_title: str = "Time"
    yaxis_title: str = "Value"

    def _get_color(self, position: int) -> str:
        colors = getattr(px.colors.qualitative, self.colormap)
        return colors[position % len(colors)]

    @staticmethod
    def _x_values(data: pd.DataFrame, time_column: Optional[str]):
        return data.index if time_column is None else data[time_column]

    def _add_series(
        self,
        figure: go.Figure,
        actual: Optional[pd.DataFrame],
        forecast: Optional[pd.DataFrame],
        name: str,
        color: str,
        target: str,
        time_column: Optional[str],
    ) -> None:
        """Add the actual and forecast traces of one series, grouped in the legend."""
        if actual is not None and len(actual) > 0:
            figure.add_trace(
                go.Scatter(
                    x=self._x_values(actual, time_column),
                    y=actual[target],
                    mode="lines",
                    line=dict(color=color, width=self.stroke_width),
                    name=f"{name} actual",
                    legendgroup=name,
                )
            )
        if forecast is not None and len(forecast) > 0:
            figure.add_trace(
                go.Scatter(
                    x=self._x_values(forecast, time_column),
                    y=forecast["forecast"],
                    mode="lines",
                    line=dict(
                        color=color, width=self.stroke_width, dash=self.forecast_dash
                    ),
                    name=f"{name} forecast",
                    legendgroup=name,
                )
            )

    def plot(
        self,
        actual: Optional[pd.DataFrame] = None,
        forecast: Optional[pd.DataFrame] = None,
        target: str = "y",
        id_column: Optional[str] = None,
        time_column: Optional[str] = None,
    ) -> go.Figure:
        """Create a plot showing the actual values and the recursive forecast.

        Every series of panel data gets its own color, its forecast is dashed.

        Args:
            actual: Observed data with the target column.
            forecast: Output of the recursive forecast pipeline, with a ``forecast``
                column.
            target: Name of the target column in ``actual``.
            id_column: Column identifying the series of panel data.
            time_column: Column holding the timestamps, the index is used if omitted.

        Returns:
            go.Figure: A plotly figure object with the configured visualization.
        """
        figure = go.Figure()

        if id_column is None:
            self._add_series(
                figure,
                actual,
                forecast,
                target,
                self._get_color(0),
                target,
                time_column,
            )
        else:
            series_ids = []
            for data in (actual, forecast):
                if data is not None:
                    series_ids += [
                        i for i in data[id_column].unique() if i not in series_ids
                    ]

            for position, series_id in enumerate(series_ids):
                self._add_series(
                    figure,
                    None if actual is None else actual[actual[id_column] == series_id],
                    (
                        None
                        if forecast is None
                        else forecast[forecast[id_column] == series_id]
                    ),
                    str(series_id),
                    self._get_color(position),
                    target,
                    time_column,
                )

        figure.update_layout(
            title=self.title,
            xaxis_title=self.xaxis_title,
            yaxis_title=self.yaxis_title,
            template="plotly_white",
            hovermode="x unified",
        )

        return figure
