import plotly.express as px
import pandas as pd

COUNTERS = ["reads", "writes", "hits", "misses"]


def export_stats_chart(rows, path: str):
    if not rows:
        with open(path, "w") as f:
            f.write("<h1>Cache Statistics</h1><p>No data to display.</p>")
        return

    df = pd.DataFrame(rows)
    # Long format: one row per (run, counter)
    df = df.melt(id_vars=["run"], value_vars=[c for c in COUNTERS if c in df.columns],
                 var_name="counter", value_name="count")
    df['count'] = pd.to_numeric(df['count'], errors='coerce')
    df = df.dropna(subset=['count'])

    fig = px.bar(
        df,
        x="counter",
        y="count",
        color="run",
        barmode="group",
        text="count",
        title="Cache Simulation Statistics",
        labels={"counter": "Counter", "count": "Count", "run": "Run"}
    )
    fig.update_layout(
        font=dict(family="Courier New, monospace", size=12),
        legend_title="Run"
    )

    fig.write_html(path, include_plotlyjs="cdn", full_html=True)


def export_stats_ascii(rows, width: int = 60):
    if not rows:
        return "No statistics."

    max_count = max((row.get(c, 0) for row in rows for c in COUNTERS), default=0)
    if max_count == 0:
        return "All counters are zero."

    scale = width / max_count

    chart = "Cache Simulation Statistics (ASCII)\n"
    chart += "-" * (width + 30) + "\n"
    for row in rows:
        chart += f"{row['run']}\n"
        for counter in COUNTERS:
            value = row.get(counter, 0)
            bar = "#" * int(value * scale)
            chart += f"  {counter:>7} |{bar:<{width}} {value}\n"
    chart += "-" * (width + 30) + "\n"

    return chart
