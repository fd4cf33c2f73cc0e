import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from config import CHART_HEIGHT_PX, CURRENCY_SYMBOL


def fix_fig(fig: go.Figure, title: str = None, height: int = CHART_HEIGHT_PX) -> go.Figure:
    """Apply consistent styling to figures."""
    fig.update_layout(
        height=height, autosize=False,
        margin=dict(l=60, r=40, t=60, b=60),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1,
                    bgcolor="rgba(255,255,255,0.8)", bordercolor="#ddd", borderwidth=1),
        transition_duration=300,
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        font=dict(family="Arial, sans-serif", size=12, color="#333"),
        hoverlabel=dict(bgcolor="white", font_size=13, font_family="Arial, sans-serif"),
    )
    if title:
        fig.update_layout(title=dict(text=title, x=0.5, xanchor="center",
                                     font=dict(size=16, family="Arial, sans-serif", color="#2c3e50")))
    fig.update_yaxes(automargin=True, showline=True, linewidth=1, linecolor="#ddd",
                     gridcolor="#eee", zeroline=False)
    fig.update_xaxes(automargin=True, showline=True, linewidth=1, linecolor="#ddd", gridcolor="#eee")
    return fig


def empty_fig(title: str = "", height: int = CHART_HEIGHT_PX) -> go.Figure:
    return fix_fig(px.scatter(), title=title, height=height)


def plot_capex_breakdown(df: pd.DataFrame) -> go.Figure:
    """Horizontal bar of CAPEX per line item, largest on top."""
    df = df.sort_values("Cost")
    fig = px.bar(
        df, x="Cost", y="Item", orientation="h",
        text="Cost",
        labels={"Cost": f"Cost, {CURRENCY_SYMBOL}", "Item": ""},
    )
    fig.update_traces(texttemplate="%{text:,.0f}", textposition="outside",
                      marker_color="#3498db", marker_line_color="#2c3e50", marker_line_width=1)
    return fix_fig(fig, title="CAPEX breakdown")


def plot_opex_schedule(long_df: pd.DataFrame) -> go.Figure:
    """Stacked bar of yearly OPEX per component (input: report_service.opex_long)."""
    fig = px.bar(
        long_df, x="Year", y="Cost", color="Component",
        labels={"Cost": f"Cost, {CURRENCY_SYMBOL}", "Year": "Year"},
        color_discrete_sequence=px.colors.qualitative.Set2,
    )
    fig.update_layout(barmode="stack", xaxis=dict(dtick=1))
    return fix_fig(fig, title="OPEX by year")
