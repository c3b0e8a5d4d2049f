"""
Visualization utilities for mikrograd computational graphs.

This module provides functions to inspect and draw the graph behind a Value,
showing the flow of data and gradients through operations.
"""

from graphviz import Digraph

from mikrograd.engine import topological_sort


def trace(root):
    """
    Collect the computational graph reachable from a root Value.

    Args:
        root: A Value object representing the output of a computation

    Returns:
        tuple: (nodes, edges) where:
            - nodes: set of all Value objects in the graph
            - edges: set of (operand, consumer) tuples

    Example:
        >>> x = Value(2.0)
        >>> y = Value(3.0)
        >>> z = x * y + x
        >>> nodes, edges = trace(z)
        >>> len(nodes)  # x, y, x*y and z
        4
    """
    nodes = set(topological_sort(root))
    edges = {(child, v) for v in nodes for child in v._prev}
    return nodes, edges


def draw_dot(root, format='svg', rankdir='LR'):
    """
    Visualize the computational graph of a Value object as a directed graph.

    Creates a Graphviz diagram showing:
    - Value nodes with their name, data and gradient
    - Operation nodes (+, *, **k, neg, ReLU)
    - Edges showing data flow through the computation

    Args:
        root: A Value object (typically the loss) to visualize from
        format: Output format ('svg', 'png', 'pdf', etc.)
        rankdir: Graph direction - 'LR' (left-right) or 'TB' (top-bottom)

    Returns:
        Digraph: A graphviz Digraph object that can be rendered or displayed

    Example:
        >>> x = Value(2.0, name='x')
        >>> y = Value(-3.0, name='y')
        >>> z = x * y
        >>> z.backward()
        >>> draw_dot(z).render('computation_graph')  # Saves as SVG

    Note:
        Rendering needs the Graphviz binaries (apt install graphviz /
        brew install graphviz); building the Digraph does not.
    """
    if rankdir not in ('LR', 'TB'):
        raise ValueError(f"rankdir must be 'LR' (left-right) or 'TB' (top-bottom), got {rankdir!r}")

    nodes, edges = trace(root)
    dot = Digraph(format=format, graph_attr={'rankdir': rankdir})

    for n in nodes:
        uid = str(id(n))
        dot.node(name=uid, label=f'{{ {n.name} | data {n.data:.4f} | grad {n.grad:.4f} }}', shape='record')

        # Results of an operation get a separate op node feeding them
        if n._op:
            dot.node(name=uid + n._op, label=n._op)
            dot.edge(uid + n._op, uid)

    for n1, n2 in edges:
        dot.edge(str(id(n1)), str(id(n2)) + n2._op)

    return dot
