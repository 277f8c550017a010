# Drives the layout through the plugin interface, the way a host application does.
from cartesian_import import GraphModel, LayoutController, default_registry
from rich import print

import networkx as nx

g = nx.karate_club_graph()
for node in g.nodes:
    g.nodes[node]["degree"] = g.degree(node)
    g.nodes[node]["clustering"] = nx.clustering(g, node)

graph_model = GraphModel(g, node_filter=lambda node: g.degree(node) > 2)

layout = default_registry.builder("Cartesian Layout Import").build_layout()
properties = {p.name: p for p in layout.properties()}
properties["xColumn"].set_as_text("degree", graph_model)
properties["yColumn"].set_as_text("clustering", graph_model)

LayoutController().execute(layout, graph_model)

print(layout.builder.ui.simple_panel(layout))
print({node: (round(d["$x"], 1), round(d["$y"], 1)) for node, d in g.nodes(data=True) if "$x" in d})
