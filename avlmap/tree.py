import logging

#
# Linked binary search tree with explicit external (sentinel) leaves,
# kept height balanced with the AVL rule and trinode restructuring.
#
# Every node is either internal, holding a key/value pair and exactly
# two children, or external, holding nothing and having no children.
# A synthetic super-root sits above the real tree: its left child is the
# real root, its right child is a permanent external node and its parent
# is None.  The super-root doubles as the "end" position of iteration.
#
# ref: Goodrich, Tamassia, Mount, "Data Structures and Algorithms in C++",
#      sections 10.1 and 10.2
#

__all__ = (
    'Node', 'InvariantError',
    'locate', 'grow', 'put', 'remove',
    'update_heights', 'rebalance', 'tall_grandchild', 'restructure',
    'clone', 'validate', 'dump',
)


logger = logging.getLogger(__name__)


class InvariantError(AssertionError):
    """Raised when the tree structure is found to be corrupted."""


class Node:

    __slots__ = ('key', 'value', 'parent', 'left', 'right', 'height')

    def __init__(self, parent=None):
        self.key = None
        self.value = None
        self.parent = parent
        self.left = None
        self.right = None
        self.height = 0

    def is_external(self):
        return self.left is None

    def is_internal(self):
        return self.left is not None

    def is_superroot(self):
        return self.parent is None

    def expand(self):
        # An external node becomes internal in place, growing two fresh
        # external children.
        self.left = Node(self)
        self.right = Node(self)
        self.height = 1

    def replace(self, key, value):
        # The node keeps its identity and position; only the payload
        # changes.
        self.key = key
        self.value = value

    def set_height(self):
        self.height = 1 + max(self.left.height, self.right.height)

    def leftmost(self):
        node = self
        while node.left is not None:
            node = node.left
        return node.parent

    def rightmost(self):
        node = self
        while node.right is not None:
            node = node.right
        return node.parent

    def next(self):
        """Return the in-order successor.

        From the last entry this climbs to the super-root (the end
        position).  From the super-root itself there is nowhere to go
        and None is returned.
        """
        if self.right is not None and self.right.left is not None:
            return self.right.leftmost()

        node = self
        parent = self.parent
        while parent is not None and node is parent.right:
            node = parent
            parent = parent.parent
        return parent

    def prev(self):
        """Return the in-order predecessor, or None before the first entry.

        From the super-root this is the right-most entry of the tree.
        """
        if self.left is not None and self.left.left is not None:
            return self.left.rightmost()

        node = self
        parent = self.parent
        while parent is not None and node is parent.left:
            node = parent
            parent = parent.parent
        return parent

    def remove_above_external(self):
        # `self` is external: drop it together with its parent and
        # promote the sibling into the parent's slot.
        parent = self.parent
        sibling = parent.right if self is parent.left else parent.left
        grandparent = parent.parent

        if parent is grandparent.left:
            grandparent.left = sibling
        else:
            grandparent.right = sibling
        sibling.parent = grandparent

        parent.parent = parent.left = parent.right = None
        parent.key = parent.value = None
        self.parent = None
        return sibling

    def __repr__(self):
        if self.is_external():
            return '<Node external id={:0x}>'.format(id(self))
        return '<Node key={!r} height={} id={:0x}>'.format(
            self.key, self.height, id(self))


def locate(root, key, less):
    """Find `key` starting at the real root below the super-root `root`.

    Returns the internal node holding the key, or the external node at
    which an entry with that key has to be grown.
    """
    node = root.left
    while node.left is not None:
        if less(key, node.key):
            node = node.left
        elif less(node.key, key):
            node = node.right
        else:
            break
    return node


def grow(node, key, value, fixup):
    node.expand()
    node.replace(key, value)
    fixup(node)
    return node


def put(root, key, value, less, fixup):
    node = locate(root, key, less)
    if node.left is not None:
        return node, False
    return grow(node, key, value, fixup), True


def remove(node, fixup):
    """Remove the entry held by the internal `node`.

    Returns the node holding the in-order successor of the removed
    entry, which is the super-root when the last entry was removed.
    """
    if node.left.left is None:
        external = node.left
        successor = node.next()
    elif node.right.left is None:
        external = node.right
        successor = node.next()
    else:
        replacement = node.right.leftmost()
        node.replace(replacement.key, replacement.value)
        external = replacement.left
        successor = node

    sibling = external.remove_above_external()
    fixup(sibling)
    return successor


def update_heights(node):
    z = node
    while not z.parent.is_superroot():
        z = z.parent
        z.set_height()


def _is_balanced(node):
    return abs(node.left.height - node.right.height) <= 1


def rebalance(node):
    # The super-root is never rebalanced; the walk stops at the real root.
    z = node
    while not z.parent.is_superroot():
        z = z.parent
        z.set_height()
        if not _is_balanced(z):
            z = restructure(tall_grandchild(z))


def tall_grandchild(z):
    zl = z.left
    zr = z.right

    if zl.height >= zr.height:
        if zl.left.height >= zl.right.height:
            return zl.left
        return zl.right

    if zr.right.height >= zr.left.height:
        return zr.right
    return zr.left


def _single_left_rotation(z, y, x):
    return (z, y, x), (z.left, y.left, x.left, x.right)


def _single_right_rotation(z, y, x):
    return (x, y, z), (x.left, x.right, y.right, z.right)


def _double_left_rotation(z, y, x):
    return (z, x, y), (z.left, x.left, x.right, y.right)


def _double_right_rotation(z, y, x):
    return (y, x, z), (y.left, x.left, x.right, z.right)


# Keyed on (y is the right child of z, x is the right child of y).
_SHAPES = {
    (True, True): _single_left_rotation,
    (False, False): _single_right_rotation,
    (True, False): _double_left_rotation,
    (False, True): _double_right_rotation,
}


def _link(node, left, right):
    node.left = left
    node.right = right
    left.parent = node
    right.parent = node
    node.set_height()


def restructure(x):
    """Trinode restructuring around the grandchild `x`.

    Re-roots the grandparent/child/grandchild path at its in-order
    middle node, hands the four subtrees below the path back in order,
    and returns the new local root.
    """
    y = x.parent
    z = y.parent

    shape = _SHAPES[y is z.right, x is y.right]
    (a, b, c), (t0, t1, t2, t3) = shape(z, y, x)

    parent = z.parent
    if parent.left is z:
        parent.left = b
    else:
        parent.right = b
    b.parent = parent

    _link(a, t0, t1)
    _link(c, t2, t3)
    _link(b, a, c)

    logger.debug('%s at key %r', shape.__name__.strip('_'), b.key)
    return b


def clone(root):
    """Deep structural copy of the tree below (and including) `root`."""
    copy = Node()
    stack = [(root, copy)]
    while stack:
        source, target = stack.pop()
        target.key = source.key
        target.value = source.value
        target.height = source.height
        if source.left is not None:
            target.left = Node(target)
            target.right = Node(target)
            stack.append((source.right, target.right))
            stack.append((source.left, target.left))
    return copy


def _check_node(node):
    if (node.left is None) is not (node.right is None):
        raise InvariantError('{!r} has exactly one child'.format(node))

    if node.left is None:
        if node.height != 0:
            raise InvariantError(
                '{!r} is external but has height {}'.format(
                    node, node.height))
        return

    for child in (node.left, node.right):
        if child.parent is not node:
            raise InvariantError(
                '{!r} does not point back to its parent {!r}'.format(
                    child, node))


def validate(root, less, balanced=True):
    """Check every structural invariant of the tree under `root`.

    Raises InvariantError on the first violation found and returns the
    number of entries (internal nodes) otherwise.
    """
    if root.parent is not None:
        raise InvariantError('super-root has a parent')
    if root.left is None or root.right is None:
        raise InvariantError('super-root is missing a child')
    if root.right.left is not None:
        raise InvariantError('right child of the super-root is internal')
    if root.left.parent is not root:
        raise InvariantError('real root does not point to the super-root')

    count = 0
    stack = [(root.left, False)]
    while stack:
        node, visited = stack.pop()
        if not visited:
            _check_node(node)
            if node.left is not None:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
            continue

        count += 1
        left, right = node.left.height, node.right.height
        if node.height != 1 + max(left, right):
            raise InvariantError(
                '{!r} should have height {}'.format(
                    node, 1 + max(left, right)))
        if balanced and abs(left - right) > 1:
            raise InvariantError(
                '{!r} is unbalanced: left height {}, right height {}'.format(
                    node, left, right))

    previous = None
    stack = []
    node = root.left
    while stack or node.left is not None:
        while node.left is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        if previous is not None and not less(previous.key, node.key):
            raise InvariantError(
                'keys out of order: {!r} before {!r}'.format(
                    previous.key, node.key))
        previous = node
        node = node.right

    return count


def dump(root):
    buf = []
    stack = [(root.left, 0)]
    while stack:
        node, level = stack.pop()
        pad = '    ' * level
        if node.left is None:
            buf.append(pad + 'nil')
            continue
        buf.append('{}Node(height={} id={:0x}): {!r}: {!r}'.format(
            pad, node.height, id(node), node.key, node.value))
        stack.append((node.right, level + 1))
        stack.append((node.left, level + 1))
    return '\n'.join(buf)
