import logging

import numpy as np

logger = logging.getLogger(__name__)


class DomainError(ValueError):
    """Raised when an operation has no finite real result for its inputs."""


class Value:
    """
    Wraps a single scalar and tracks the operations applied to it.

    The Value class is the core of the autograd engine. Every operation between
    Values returns a new Value that remembers its operands and how to push its
    gradient back to them, so any expression forms a directed acyclic graph
    that backward() can walk.

    Example:
        >>> x = Value(2.0)
        >>> y = Value(3.0)
        >>> z = x * y + x
        >>> z.backward()  # Compute gradients
        >>> print(x.grad)  # dz/dx = y + 1 = 4.0
    """

    def __init__(self, data, _children=(), _op='', name=""):
        """
        Initialize a Value object.

        Args:
            data: The scalar value (anything float() accepts)
            _children: Tuple of operand Values, in order (internal use for autograd)
            _op: Tag of the operation that created this Value (internal)
            name: Optional name for debugging and visualization
        """
        self.data = float(data)
        self.grad = 0.0
        self.name = name

        # Internal variables for building the computational graph
        self._backward = lambda: None  # Local derivative rule
        self._prev = tuple(_children)   # Operands, in order; may repeat
        self._op = _op                  # Operation that created this node

    def __add__(self, other):
        """
        Addition: supports Value + Value and Value + number.

        Example:
            >>> c = Value(3.0) + Value(4.0)  # c.data = 7.0
        """
        other = other if isinstance(other, Value) else Value(other)
        out = Value(self.data + other.data, (self, other), '+')

        def _backward():
            """d(a+b)/da = 1, d(a+b)/db = 1"""
            self.grad += out.grad
            other.grad += out.grad

        out._backward = _backward
        return out

    def __mul__(self, other):
        """
        Multiplication: supports Value * Value and Value * number.

        Example:
            >>> c = Value(3.0) * Value(4.0)  # c.data = 12.0
        """
        other = other if isinstance(other, Value) else Value(other)
        a, b = self.data, other.data
        out = Value(a * b, (self, other), '*')

        def _backward():
            """d(a*b)/da = b, d(a*b)/db = a"""
            self.grad += b * out.grad
            other.grad += a * out.grad

        out._backward = _backward
        return out

    def __pow__(self, other):
        """
        Power operation: raises the Value to a constant int/float exponent.

        The exponent is baked into the node, it is not an operand. Both the
        result and its slope k * x^(k-1) must be finite reals, otherwise
        DomainError is raised here rather than handing NaN or inf downstream.
        That rules out a negative base with a non-integer exponent, zero with
        a negative exponent, and zero with an exponent between 0 and 1.

        Example:
            >>> x = Value(3.0)
            >>> y = x ** 2  # y.data = 9.0
        """
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            raise TypeError(f"only int/float powers are supported, got {type(other).__name__}")

        try:
            k = float(other)
        except OverflowError:
            raise DomainError(f"exponent {other!r} does not fit in a float") from None

        with np.errstate(all='ignore'):
            data = np.float_power(self.data, k)
            if k == 0:
                slope = 0.0
            else:
                slope = k * np.float_power(self.data, k - 1)

        if not (np.isfinite(data) and np.isfinite(slope)):
            raise DomainError(f"{self.data!r} ** {other!r} has no finite real value or derivative")

        out = Value(data, (self,), f'**{other}')
        slope = float(slope)

        def _backward():
            """d(x^k)/dx = k * x^(k-1)"""
            self.grad += slope * out.grad

        out._backward = _backward
        return out

    def __neg__(self):
        """Negation: -x"""
        out = Value(-self.data, (self,), 'neg')

        def _backward():
            """d(-x)/dx = -1"""
            self.grad -= out.grad

        out._backward = _backward
        return out

    def relu(self):
        """
        ReLU (Rectified Linear Unit) activation: max(0, x)

        The gradient is 0 at x == 0.

        Example:
            >>> Value(-1.0).relu().data
            0.0
        """
        active = self.data > 0
        out = Value(self.data if active else 0.0, (self,), 'ReLU')

        def _backward():
            """d(ReLU(x))/dx = 1 if x > 0, else 0"""
            if active:
                self.grad += out.grad

        out._backward = _backward
        return out

    def zero_grad(self):
        """Reset this node's gradient to zero."""
        self.grad = 0.0

    def backward(self):
        """
        Perform backpropagation from this Value.

        Seeds this node's gradient with 1.0, then runs every reachable node's
        local rule in reverse topological order. Each node therefore receives
        all contributions from its consumers before passing its own gradient
        on to its operands.

        Gradients of every other node are accumulated, not assigned: reset
        them (zero_grad) before a second pass over the same nodes.

        Local slopes are taken from operand values as they were when each
        node was built, so reassigning a leaf's data afterwards does not
        change the gradients of an existing graph. Build a new graph to see
        the new value.

        Example:
            >>> x = Value(2.0)
            >>> y = x * 3 + 1
            >>> y.backward()
            >>> print(x.grad)  # dy/dx = 3.0
        """
        topo = topological_sort(self)
        logger.debug("backward pass over %d nodes from %r", len(topo), self)

        self.grad = 1.0
        for v in reversed(topo):
            v._backward()

    # Reverse and derived operations (use the basic operations defined above)

    def __radd__(self, other):
        """Right addition: other + self (when other is not a Value)"""
        return self + other

    def __sub__(self, other):
        """Subtraction: a - b = a + (-b)"""
        other = other if isinstance(other, Value) else Value(other)
        return self + (-other)

    def __rsub__(self, other):
        """Right subtraction: other - self"""
        return other + (-self)

    def __rmul__(self, other):
        """Right multiplication: other * self (when other is not a Value)"""
        return self * other

    def __truediv__(self, other):
        """Division: a / b = a * b^(-1)"""
        other = other if isinstance(other, Value) else Value(other)
        return self * other**-1

    def __rtruediv__(self, other):
        """Right division: other / self"""
        return other * self**-1

    def __repr__(self):
        """Return a readable string representation of the Value."""
        name_str = f"'{self.name}' " if self.name else ""
        op_str = f" from {self._op}" if self._op else ""
        return f"Value({name_str}data={self.data}, grad={self.grad}{op_str})"


def topological_sort(root):
    """
    Order every Value reachable from root so operands precede their consumers.

    Depth-first post-order over operand edges, with a visited set so shared
    sub-expressions appear once. root is always last. Uses an explicit stack,
    so long chains (e.g. a sum over thousands of terms) do not recurse.

    Args:
        root: The Value to start from

    Returns:
        list: Reachable Values, operands first
    """
    topo = []
    visited = set()
    stack = [(root, False)]

    while stack:
        v, expanded = stack.pop()
        if expanded:
            # All operands of v have been recorded
            topo.append(v)
            continue
        if v in visited:
            continue
        visited.add(v)
        stack.append((v, True))
        # Reversed so the first operand is explored first
        for child in reversed(v._prev):
            if child not in visited:
                stack.append((child, False))

    return topo


def zero_grad(values):
    """
    Reset the gradient of every Value in an iterable.

    Example:
        >>> loss.backward()
        >>> zero_grad(topological_sort(loss))  # every node back to 0.0
    """
    for v in values:
        v.zero_grad()
