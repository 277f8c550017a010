import logging

from cartesian_import.graph.model import GraphModel
from cartesian_import.layout_spi.layout import Layout

logger = logging.getLogger(__name__)


class LayoutController:
    def __init__(self, max_iterations: int | None = None):
        """
        Drives layouts through their lifecycle the way the host does.

        Args:
            max_iterations (int, optional): Stop after this many steps even if the
                layout could continue. Defaults to running until the layout is done.
        """
        self.max_iterations = max_iterations

    def execute(self, layout: Layout, graph_model: GraphModel) -> int:
        """Run a layout on a graph model and return the number of steps taken."""
        layout.set_graph_model(graph_model)
        layout.init_algo()
        iterations = 0
        try:
            while layout.can_algo():
                if self.max_iterations is not None and iterations >= self.max_iterations:
                    break
                layout.go_algo()
                iterations += 1
        finally:
            layout.end_algo()
        logger.debug("Layout %r finished after %d step(s)", layout.builder.name, iterations)
        return iterations
