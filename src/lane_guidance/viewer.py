"""Plotly-based lane guidance panel."""

from dataclasses import dataclass
from typing import Optional, Sequence

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.lane_guidance.aggregator import (
    LaneAggregate,
    ManeuverRecord,
    aggregate,
    occupancy_matrix,
)
from src.lane_guidance.directions import angle_to_degrees, classify
from src.lane_guidance.validator import ValidationResult, validate

HIGHLIGHT_OUTLINE_COLOR = "rgb(220, 38, 38)"  # Red
REGULAR_OUTLINE_COLOR = "rgb(52, 73, 94)"


@dataclass
class LaneInfo:
    """Display data for one lane bar."""

    lane_number: int
    icons: str
    description: str
    color: str
    hover_text: str


def extract_lane_info(aggregates: dict[int, LaneAggregate]) -> list[LaneInfo]:
    """
    Build display data for every aggregated lane.

    Args:
        aggregates: Mapping of lane number to LaneAggregate

    Returns:
        List of LaneInfo ordered by lane number
    """
    infos: list[LaneInfo] = []

    for lane_number in sorted(aggregates):
        lane = aggregates[lane_number]
        description = " + ".join(direction.label for direction in lane.directions)

        text = f"<b>Lane {lane_number}</b><br>"
        text += f"Directions: {description}<br>"
        text += f"Angles: {', '.join(str(angle) for angle in lane.angles)}"
        if lane.link_ids:
            text += f"<br>Links: {', '.join(str(link_id) for link_id in lane.link_ids)}"

        infos.append(
            LaneInfo(
                lane_number=lane_number,
                icons="<br>".join(direction.icon for direction in lane.directions),
                description=description,
                color=lane.display_color,
                hover_text=text,
            )
        )

    return infos


def create_figure(
    records: Sequence[ManeuverRecord],
    title: str = "Lane Guidance",
    highlight_links: Optional[list[int]] = None,
    show_input_grid: bool = True,
) -> go.Figure:
    """
    Create the lane guidance panel for a set of maneuver records.

    Args:
        records: Maneuver records in input order
        title: Figure title
        highlight_links: External link ids whose lanes should be outlined
        show_input_grid: Whether to show the raw occupancy grid below the lanes

    Returns:
        Plotly Figure object ready for display

    Raises:
        InvalidAngleCode: If any record has an out-of-range angle code
    """
    aggregates = aggregate(records)
    result = validate(aggregates)
    lane_infos = extract_lane_info(aggregates)

    highlight_set = set(highlight_links or [])
    highlighted_infos: list[LaneInfo] = []
    regular_infos: list[LaneInfo] = []

    for info in lane_infos:
        if highlight_set.intersection(aggregates[info.lane_number].link_ids):
            highlighted_infos.append(info)
        else:
            regular_infos.append(info)

    rows = 2 if show_input_grid else 1
    fig = make_subplots(
        rows=rows,
        cols=1,
        row_heights=[0.65, 0.35] if rows == 2 else None,
        vertical_spacing=0.12,
        subplot_titles=["Lanes", "Input records"][:rows],
    )

    if regular_infos:
        _add_lanes_to_figure(fig, regular_infos, name="Lanes", outline=REGULAR_OUTLINE_COLOR)

    if highlighted_infos:
        _add_lanes_to_figure(
            fig,
            highlighted_infos,
            name="Highlighted lanes",
            outline=HIGHLIGHT_OUTLINE_COLOR,
            outline_width=5,
        )

    if show_input_grid and records:
        _add_input_grid_to_figure(fig, records)

    fig.update_xaxes(title_text="Lane", dtick=1, row=1, col=1)
    fig.update_yaxes(visible=False, row=1, col=1)

    fig.update_layout(
        title=dict(text=f"{title}<br><sup>{_format_verdict(result)}</sup>"),
        showlegend=True,
        barmode="overlay",
        legend=dict(
            yanchor="top",
            y=0.99,
            xanchor="right",
            x=0.99,
            itemclick="toggle",
            itemdoubleclick="toggleothers",
        ),
        margin=dict(l=40, r=40, t=120, b=40),
        updatemenus=_create_toggle_buttons(fig),
    )

    return fig


def _format_verdict(result: ValidationResult) -> str:
    if result.is_valid:
        return "Validation passed"
    return "Validation failed: " + "<br>".join(result.errors)


def _create_toggle_buttons(fig: go.Figure) -> list[dict]:
    """Create a dropdown menu that shows all traces or only one of them."""
    trace_names = [trace.name for trace in fig.data]
    num_traces = len(trace_names)

    buttons = [
        dict(
            label="All Visible",
            method="restyle",
            args=[{"visible": [True] * num_traces}],
        ),
    ]

    for i, name in enumerate(trace_names):
        visible = ["legendonly"] * num_traces
        visible[i] = True
        buttons.append(
            dict(
                label=f"Only {name}",
                method="restyle",
                args=[{"visible": visible}],
            )
        )

    return [
        dict(
            type="dropdown",
            direction="down",
            buttons=buttons,
            pad={"r": 10, "t": 10},
            showactive=True,
            x=0.0,
            xanchor="left",
            y=1.2,
            yanchor="top",
        )
    ]


def _add_lanes_to_figure(
    fig: go.Figure,
    infos: list[LaneInfo],
    name: str,
    outline: str,
    outline_width: int = 2,
) -> None:
    """Add one bar per lane, labelled with its stacked direction icons."""
    fig.add_trace(
        go.Bar(
            x=[info.lane_number for info in infos],
            y=[1] * len(infos),
            marker=dict(
                color=[info.color for info in infos],
                line=dict(color=outline, width=outline_width),
            ),
            text=[f"{info.icons}<br><br>{info.description}" for info in infos],
            textposition="inside",
            insidetextanchor="middle",
            textfont=dict(size=18, color="white"),
            hovertext=[info.hover_text for info in infos],
            hoverinfo="text",
            name=name,
        ),
        row=1,
        col=1,
    )


def _add_input_grid_to_figure(fig: go.Figure, records: Sequence[ManeuverRecord]) -> None:
    """Add the raw occupancy flags as a heatmap, one row per record."""
    matrix = occupancy_matrix(records)
    lane_labels = list(range(1, matrix.shape[1] + 1))
    record_labels = [
        f"r{i + 1}: angle {record.angle_code} "
        f"({angle_to_degrees(record.angle_code)}°, {classify(record.angle_code).label})"
        for i, record in enumerate(records)
    ]

    fig.add_trace(
        go.Heatmap(
            z=matrix,
            x=lane_labels,
            y=record_labels,
            colorscale=[[0.0, "rgb(229, 231, 235)"], [1.0, "rgb(59, 130, 246)"]],
            zmin=0,
            zmax=1,
            showscale=False,
            xgap=2,
            ygap=2,
            hovertemplate="%{y}<br>Lane %{x}: %{z}<extra></extra>",
            name="Input records",
        ),
        row=2,
        col=1,
    )
    fig.update_xaxes(title_text="Lane slot", dtick=1, row=2, col=1)
    fig.update_yaxes(autorange="reversed", row=2, col=1)


def show_figure(fig: go.Figure) -> None:
    """Display figure in browser."""
    fig.show()


def export_html(fig: go.Figure, output_path: str) -> None:
    """Export figure as standalone HTML file."""
    fig.write_html(output_path, include_plotlyjs=True, full_html=True)
