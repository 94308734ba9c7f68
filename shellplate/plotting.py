"""
Plotly rendering of a layout Scene

Used by the Streamlit results view. Shapes are drawn in content space
(millimetres); the axis ranges are the canvas viewport mapped back through
the scene transform, so zoom and pan come from the ViewState.
"""

import plotly.graph_objects as go

from .render import LineCommand, RectCommand, Scene, TextCommand, TOOLTIP_TEXT

_XANCHOR = {"start": "left", "middle": "center", "end": "right"}


def _add_rect(fig: go.Figure, cmd: RectCommand, scale: float):
    if cmd.hatch:
        # Closed path so plotly can fill it with a pattern and show a hover label
        fig.add_trace(go.Scatter(
            x=[cmd.x, cmd.x + cmd.w, cmd.x + cmd.w, cmd.x, cmd.x],
            y=[cmd.y, cmd.y, cmd.y + cmd.h, cmd.y + cmd.h, cmd.y],
            mode="lines",
            fill="toself",
            fillcolor="rgba(0, 0, 0, 0)",
            fillpattern=dict(shape="+", fgcolor=cmd.stroke, solidity=0.2),
            line=dict(width=cmd.line_width * scale, color=cmd.stroke),
            hoveron="fills",
            hoverinfo="text",
            text=TOOLTIP_TEXT,
            showlegend=False,
        ))
        return
    fig.add_shape(
        type="rect",
        x0=cmd.x,
        y0=cmd.y,
        x1=cmd.x + cmd.w,
        y1=cmd.y + cmd.h,
        line=dict(width=cmd.line_width * scale if cmd.stroke else 0, color=cmd.stroke or "rgba(0, 0, 0, 0)"),
        fillcolor=cmd.fill or "rgba(0, 0, 0, 0)",
        layer="below" if cmd.role == "used" else "above",
    )


def scene_figure(scene: Scene, title: str = "") -> go.Figure:
    """Build a plotly figure reproducing the scene at its current zoom and pan"""
    t = scene.transform
    fig = go.Figure()

    for cmd in scene.commands:
        if isinstance(cmd, RectCommand):
            _add_rect(fig, cmd, t.scale)
        elif isinstance(cmd, LineCommand):
            fig.add_shape(
                type="line",
                x0=cmd.x0,
                y0=cmd.y0,
                x1=cmd.x1,
                y1=cmd.y1,
                line=dict(width=cmd.line_width * t.scale, color=cmd.color),
            )
        elif isinstance(cmd, TextCommand):
            fig.add_annotation(
                x=cmd.x,
                y=cmd.y,
                text=f"<b>{cmd.text}</b>" if cmd.bold else cmd.text,
                showarrow=False,
                xanchor=_XANCHOR.get(cmd.anchor, "left"),
                yanchor="bottom",
                font=dict(size=cmd.font_size * t.scale, color=cmd.color, family="Arial"),
            )

    x_min, y_min = t.to_content(0, 0)
    x_max, y_max = t.to_content(scene.width, scene.height)
    fig.update_yaxes(scaleanchor="x", scaleratio=1)
    fig.update_layout(
        title=title,
        width=scene.width,
        height=scene.height,
        margin=dict(l=0, r=0, t=40 if title else 0, b=0),
        xaxis=dict(range=[x_min, x_max], visible=False),
        yaxis=dict(range=[y_max, y_min], visible=False),
        plot_bgcolor="white",
        dragmode="pan",
    )
    return fig
