import pytest

from mikrograd.engine import Value
from mikrograd.utils import draw_dot, trace


def test_trace_collects_nodes_and_edges():
    x = Value(2.0)
    y = Value(3.0)
    p = x * y
    z = p + x

    nodes, edges = trace(z)

    assert nodes == {x, y, p, z}
    assert edges == {(x, p), (y, p), (p, z), (x, z)}


def test_trace_of_a_leaf():
    x = Value(1.0)
    assert trace(x) == ({x}, set())


def test_draw_dot():
    x = Value(2.0, name='x')
    y = Value(-3.0, name='y')
    z = x * y
    z.name = 'z'
    z.backward()

    dot = draw_dot(z, format='png', rankdir='TB')

    assert dot.format == 'png'
    assert 'rankdir=TB' in dot.source
    assert '{ x | data 2.0000 | grad -3.0000 }' in dot.source
    assert '{ z | data -6.0000 | grad 1.0000 }' in dot.source
    assert f'{id(z)}*' in dot.source
    assert f'{id(x)} -> "{id(z)}*"' in dot.source or f'{id(x)} -> {id(z)}*' in dot.source


def test_draw_dot_rejects_unknown_rankdir():
    with pytest.raises(ValueError):
        draw_dot(Value(1.0), rankdir='RL')
