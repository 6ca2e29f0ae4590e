import matplotlib.pyplot as plt
import networkx as nx
import numpy as np

from delta_regions.algorithms.region_selector import map_region_to_graph


def visualize_region_comparison(pair, region, title="Region Comparison", show=True):
    """
    Draw a region in both graph versions side by side, nodes coloured by distortion.

    Args:
        pair: GraphPair with distortion computed
        region: Region selected on graph-2
        title: Title for the plot
        show: Call plt.show() at the end

    Returns:
        The matplotlib figure
    """
    before = map_region_to_graph(region, pair.graph1)
    after = map_region_to_graph(region, pair.graph2)

    fig = plt.figure(figsize=(15, 7))
    # Same layout for both
    pos = nx.spring_layout(nx.compose(before, after), seed=42)
    vmin = pair.min_delta if np.isfinite(pair.min_delta) else 0
    vmax = pair.max_delta if np.isfinite(pair.max_delta) else 1

    for i, (G, label) in enumerate([(before, "Graph 1"), (after, "Graph 2")], start=1):
        plt.subplot(1, 2, i)
        values = [pair.delta(v) for v in G.nodes()]
        nx.draw_networkx_nodes(G, pos, node_size=300, node_color=values,
                               cmap=plt.cm.viridis, vmin=vmin, vmax=vmax, alpha=0.8)
        nx.draw_networkx_edges(G, pos, width=1.0, alpha=0.5)
        nx.draw_networkx_labels(G, pos, font_size=8)
        weights = nx.get_edge_attributes(G, "weight")
        nx.draw_networkx_edge_labels(G, pos, edge_labels=weights, font_size=7)
        plt.title(f"{label} ({G.number_of_edges()} edges)")
        plt.axis('off')

    plt.suptitle(title)
    plt.tight_layout()
    if show:
        plt.show()
    return fig


def plot_sweep_results(frame, metric="edges_min", show=True):
    """
    Bar plot of the best metric sum per method from ScoreAccumulator.to_frame().
    """
    data = frame[frame["metric"] == metric]
    fig = plt.figure(figsize=(10, 6))
    plt.bar(data["method"].astype(str), data["best_sum"], color=plt.cm.viridis(0.6))
    plt.xticks(rotation=45, ha='right')
    plt.ylabel(f"best sum of {metric}")
    plt.title("Best region scores per method")
    plt.tight_layout()
    if show:
        plt.show()
    return fig
