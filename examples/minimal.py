from cartesian_import import CartesianImportLayout
from rich import print

import networkx as nx

g = nx.Graph()
g.add_node("Berlin", lon=13.40, lat=52.52)
g.add_node("Paris", lon=2.35, lat=48.86)
g.add_node("Rome", lon=12.50, lat=41.90)
g.add_edge("Berlin", "Paris")
g.add_edge("Paris", "Rome")

print(CartesianImportLayout("lon", "lat", scale=100)(g))
