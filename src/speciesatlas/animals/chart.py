"""Bar chart of animal speeds, drawn with matplotlib or built as a plotly figure.

Bars are placed on a band scale, heights on a niced linear scale, and each bar
is coloured by diet. The legend always lists all three diets.
"""

import io
from collections.abc import Sequence
from dataclasses import dataclass

import matplotlib

# Ensure matplotlib uses non-GUI backend BEFORE any other matplotlib imports
matplotlib.use("Agg")

import plotly.graph_objects as go
from matplotlib.figure import Figure
from matplotlib.patches import Patch

from speciesatlas.animals.models import AnimalRecord, Diet
from speciesatlas.animals.scales import BandScale, LinearScale
from speciesatlas.config.models import ChartConfig, ChartMargins

DIET_COLORS: dict[Diet, str] = {
    Diet.CARNIVORE: "#ef4444",
    Diet.HERBIVORE: "#22c55e",
    Diet.OMNIVORE: "#3b82f6",
}

X_AXIS_LABEL = "Animal"
Y_AXIS_LABEL = "Speed (km/h)"


@dataclass
class ChartLayout:
    """Canvas size and scales computed for one set of records."""

    width: float
    height: float
    margins: ChartMargins
    x: BandScale
    y: LinearScale


class SpeedChartRenderer:
    """Draws the animal speed bar chart.

    Each call to ``render`` wipes the target figure and rebuilds the chart
    from scratch, so the figure always shows exactly one chart.
    """

    def __init__(self, chart_config: ChartConfig | None = None) -> None:
        self.chart_config = chart_config or ChartConfig()

    def layout(self, records: Sequence[AnimalRecord], width: float, height: float) -> ChartLayout:
        """Compute canvas size and scales, enforcing the minimum canvas size."""
        cfg = self.chart_config
        margins = cfg.margins
        width = max(width, cfg.min_width)
        height = max(height, cfg.min_height)

        x = BandScale(
            (record.name for record in records),
            (margins.left, width - margins.right),
            padding=cfg.band_padding,
        )
        y_max = max((record.speed for record in records), default=0.0)
        if y_max <= 0:
            y_max = 1.0
        y = LinearScale((0.0, y_max), (height - margins.bottom, margins.top)).nice()
        return ChartLayout(width=width, height=height, margins=margins, x=x, y=y)

    def render(self, figure: Figure, records: Sequence[AnimalRecord]) -> None:
        """Draw ``records`` onto ``figure``, replacing anything drawn before.

        With no records the figure is left empty: no axes, no legend.
        """
        figure.clear()
        if not records:
            return

        dpi = figure.dpi
        measured_width, measured_height = figure.get_size_inches() * dpi
        chart = self.layout(records, measured_width, measured_height)
        figure.set_size_inches(chart.width / dpi, chart.height / dpi)

        m = chart.margins
        ax = figure.add_axes(
            (
                m.left / chart.width,
                m.bottom / chart.height,
                (chart.width - m.left - m.right) / chart.width,
                (chart.height - m.top - m.bottom) / chart.height,
            )
        )
        ax.set_xlim(m.left, chart.width - m.right)
        ax.set_ylim(*chart.y.domain)

        ax.bar(
            [chart.x(record.name) for record in records],
            [record.speed for record in records],
            width=chart.x.bandwidth,
            bottom=0,
            align="edge",
            color=[DIET_COLORS[record.diet] for record in records],
        )

        ax.set_xticks(
            [chart.x.center(name) for name in chart.x.domain],
            labels=chart.x.domain,
        )
        ax.tick_params(axis="x", labelsize=8)
        ax.set_yticks(chart.y.ticks(self.chart_config.y_ticks))
        ax.set_xlabel(X_AXIS_LABEL)
        ax.set_ylabel(Y_AXIS_LABEL)

        ax.legend(handles=self._legend_handles(), loc="upper right", frameon=False)

    def render_png(
        self,
        records: Sequence[AnimalRecord],
        width: float | None = None,
        height: float | None = None,
    ) -> io.BytesIO:
        """Render the chart to a PNG and return it as a BytesIO buffer."""
        cfg = self.chart_config
        figure = Figure(
            figsize=((width or cfg.min_width) / cfg.dpi, (height or cfg.min_height) / cfg.dpi),
            dpi=cfg.dpi,
        )
        self.render(figure, records)

        buf = io.BytesIO()
        figure.savefig(buf, format="png")
        buf.seek(0)
        return buf

    def build_plotly_figure(self, records: Sequence[AnimalRecord]) -> go.Figure:
        """Build an interactive version of the chart for the web view."""
        if not records:
            return self._create_empty_plot()

        cfg = self.chart_config
        chart = self.layout(records, cfg.min_width, cfg.min_height)

        fig = go.Figure()
        for diet in Diet:
            subset = [record for record in records if record.diet is diet]
            fig.add_trace(
                go.Bar(
                    x=[record.name for record in subset],
                    y=[record.speed for record in subset],
                    name=diet.label,
                    marker_color=DIET_COLORS[diet],
                    showlegend=True,
                )
            )

        m = chart.margins
        fig.update_layout(
            width=chart.width,
            height=chart.height,
            margin={"l": m.left, "r": m.right, "t": m.top, "b": m.bottom},
            bargap=cfg.band_padding,
            barmode="overlay",
            xaxis={
                "title": {"text": X_AXIS_LABEL},
                "categoryorder": "array",
                "categoryarray": chart.x.domain,
            },
            yaxis={
                "title": {"text": Y_AXIS_LABEL},
                "range": list(chart.y.domain),
                "tickmode": "array",
                "tickvals": chart.y.ticks(cfg.y_ticks),
            },
            legend={"x": 1, "y": 1, "xanchor": "right", "yanchor": "top"},
            plot_bgcolor="white",
        )
        return fig

    def _create_empty_plot(self) -> go.Figure:
        """Create a blank figure with no axes for an empty data set."""
        fig = go.Figure()
        fig.update_layout(
            xaxis={"visible": False},
            yaxis={"visible": False},
            plot_bgcolor="white",
        )
        return fig

    @staticmethod
    def _legend_handles() -> list[Patch]:
        return [Patch(facecolor=DIET_COLORS[diet], label=diet.label) for diet in Diet]
