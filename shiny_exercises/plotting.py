import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


# ============================================================
# Configuration / constants
# ============================================================

DEFAULT_SEX_COLORS: dict[str, str] = {
    "female": "#d62728",
    "male": "#1f77b4",
}

FALLBACK_COLOR = "#7f7f7f"

Y_AXIS: dict[str, tuple[str, str]] = {
    # input value -> (summary column, axis title)
    "rate": ("rate", "Injuries per 10,000 people"),
    "count": ("n", "Estimated number of injuries"),
}

HOVER_TEMPLATE_RATE = (
    "Sex: %{customdata[0]}<br>"
    "Age: %{x}<br>"
    "Injuries per 10,000 people: %{y:.2f}<extra></extra>"
)

HOVER_TEMPLATE_COUNT = (
    "Sex: %{customdata[0]}<br>"
    "Age: %{x}<br>"
    "Estimated injuries: %{y:,.0f}<extra></extra>"
)


# ============================================================
# Helper functions
# ============================================================


def _build_palette(sex_colors: dict[str, str] | None) -> dict[str, str]:
    """
    Merge user-supplied colors with defaults (user overrides default).
    """
    return {**DEFAULT_SEX_COLORS, **(sex_colors or {})}


def _resolve_color(sex: str, palette: dict[str, str]) -> str:
    """
    Get color for a sex label, ignoring case and falling back to grey.
    """
    color = palette.get(sex)
    if color is not None:
        return color
    return palette.get(str(sex).lower(), FALLBACK_COLOR)


# ============================================================
# Main plotting functions
# ============================================================


def create_injury_plot(
    summary: pd.DataFrame,
    y: str = "rate",
    *,
    title: str | None = None,
    sex_colors: dict[str, str] | None = None,
) -> go.Figure:
    """
    Line chart of injuries by age, one line per sex.

    Parameters
    ----------
    summary : pd.DataFrame
        Output of ``pipeline.summarise_by_age_sex`` with columns 'age',
        'sex', 'n' and 'rate'.
    y : str, default "rate"
        ``"rate"`` for injuries per 10,000 people or ``"count"`` for the
        estimated number of injuries.
    title : str | None, default None
        Optional figure title, typically the product name.
    sex_colors : dict[str, str] | None, default None
        Optional mapping of sex -> hex color. Overrides defaults.

    Returns
    -------
    go.Figure
        A Plotly Figure; empty when there is nothing to plot.
    """
    if y not in Y_AXIS:
        raise ValueError(f"y must be one of {list(Y_AXIS)}, got {y!r}")
    value_col, y_label = Y_AXIS[y]

    df_clean = summary.dropna(subset=["age", "sex", value_col])
    if df_clean.empty:
        return go.Figure()

    hover_template = HOVER_TEMPLATE_RATE if y == "rate" else HOVER_TEMPLATE_COUNT
    palette = _build_palette(sex_colors)

    fig = go.Figure()
    for sex, sub in df_clean.sort_values("age").groupby("sex"):
        color = _resolve_color(sex, palette)
        fig.add_trace(
            go.Scatter(
                x=sub["age"],
                y=sub[value_col],
                mode="lines",
                line=dict(width=2, color=color),
                name=str(sex),
                hovertemplate=hover_template,
                customdata=[[sex]] * len(sub),
            )
        )

    fig.update_xaxes(title_text="Age")
    fig.update_yaxes(title_text=y_label, tickformat=",", rangemode="tozero")
    fig.update_layout(
        title=title,
        legend=dict(title="Sex", orientation="h", x=0.5, y=1.02, xanchor="center"),
        margin=dict(t=60, l=50, r=30, b=40),
        plot_bgcolor="#f5f7fb",
    )
    return fig


def create_dataset_plot(df: pd.DataFrame, title: str | None = None) -> go.Figure:
    """
    Overview plot of a dataset: a scatter matrix of its numeric columns,
    or a bar chart of the first column's counts when none are numeric.
    """
    if df.empty or df.columns.empty:
        return go.Figure()

    numeric = df.select_dtypes(include="number").columns.tolist()
    if numeric:
        fig = px.scatter_matrix(df, dimensions=numeric, title=title)
        fig.update_traces(diagonal_visible=False, marker=dict(size=4))
        return fig

    first = df.columns[0]
    counts = df[first].astype(str).value_counts().reset_index()
    counts.columns = [first, "count"]
    return px.bar(counts, x=first, y="count", title=title)
