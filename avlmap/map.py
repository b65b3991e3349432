import collections.abc
import logging
import operator
import os
import reprlib

from . import tree


__all__ = ('Map', 'BSTMap', 'Position')


# Set AVLMAP_DEBUG=1 to validate the whole tree after every mutation.
DEBUG = os.environ.get('AVLMAP_DEBUG') == '1'

logger = logging.getLogger(__name__)

if DEBUG:
    logger.debug('AVLMAP_DEBUG is set, validating after every mutation')


_MISSING = object()


class Position:
    """A position in a map: an entry, or the end of the map.

    Positions compare equal when they refer to the same slot of the same
    tree.  The key of an entry is read-only through a position; the
    value can be assigned.
    """

    __slots__ = ('_node',)

    def __init__(self, node):
        self._node = node

    def __entry(self):
        node = self._node
        if node.left is None or node.parent is None:
            raise KeyError('position does not refer to an entry')
        return node

    @property
    def key(self):
        return self.__entry().key

    @property
    def value(self):
        return self.__entry().value

    @value.setter
    def value(self, value):
        self.__entry().value = value

    @property
    def item(self):
        node = self.__entry()
        return node.key, node.value

    def next(self):
        if self._node.left is None:
            raise KeyError('position does not refer to an entry')
        node = self._node.next()
        if node is None:
            raise IndexError('cannot advance past the end')
        return Position(node)

    def prev(self):
        if self._node.left is None:
            raise KeyError('position does not refer to an entry')
        node = self._node.prev()
        if node is None:
            raise IndexError('cannot move before the first entry')
        return Position(node)

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self._node is other._node

    def __hash__(self):
        return hash(self._node)

    def __repr__(self):
        node = self._node
        if node.parent is None and node.left is not None:
            return '<avlmap.Position end at 0x{:0x}>'.format(id(node))
        if node.left is None:
            return '<avlmap.Position invalid at 0x{:0x}>'.format(id(node))
        return '<avlmap.Position {!r}: {!r} at 0x{:0x}>'.format(
            node.key, node.value, id(node))


class MapView:

    def __init__(self, count, forward, backward):
        self.__count = count
        self.__forward = forward
        self.__backward = backward

    def __len__(self):
        return self.__count

    def __iter__(self):
        return self.__forward()

    def __reversed__(self):
        return self.__backward()


class BSTMap:
    """Ordered map on an unbalanced binary search tree.

    Heights are maintained along every mutation path but no
    restructuring ever happens, so sorted input degrades the tree to a
    list.  Use `Map` unless that is what you want.
    """

    _fixup = staticmethod(tree.update_heights)
    _balanced = False

    def __init__(self, col=None, *, comparator=None, default_factory=None):
        if isinstance(col, BSTMap):
            if comparator is None:
                comparator = col.__less
            if default_factory is None:
                default_factory = col.default_factory

        self.__less = operator.lt if comparator is None else comparator
        self.default_factory = default_factory
        self.__root = tree.Node()
        self.__root.expand()
        self.__count = 0

        if col is not None:
            if self.__can_clone(col):
                self.__root = tree.clone(col.__root)
                self.__count = col.__count
            else:
                self.update(col)

    def __can_clone(self, other):
        return (isinstance(other, BSTMap) and
                other.__less is self.__less and
                (other._balanced or not self._balanced))

    def __mutated(self):
        if DEBUG:
            self.validate()

    @property
    def comparator(self):
        return self.__less

    @property
    def height(self):
        return self.__root.left.height

    def __len__(self):
        return self.__count

    def begin(self):
        return Position(self.__root.leftmost())

    def end(self):
        return Position(self.__root)

    def rbegin(self):
        node = self.__root.prev()
        return Position(self.__root if node is None else node)

    def find(self, key):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is None:
            return Position(self.__root)
        return Position(node)

    def count(self, key):
        node = tree.locate(self.__root, key, self.__less)
        return 0 if node.left is None else 1

    def __contains__(self, key):
        return tree.locate(self.__root, key, self.__less).left is not None

    def get(self, key, default=None):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is None:
            return default
        return node.value

    def at(self, key):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is None:
            raise KeyError(key)
        return node.value

    def __getitem__(self, key):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is not None:
            return node.value

        if self.default_factory is None:
            raise KeyError(key)

        value = self.default_factory()
        tree.grow(node, key, value, self._fixup)
        self.__count += 1
        self.__mutated()
        return value

    def __setitem__(self, key, value):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is not None:
            node.value = value
            return

        tree.grow(node, key, value, self._fixup)
        self.__count += 1
        self.__mutated()

    def insert(self, key, value):
        node, inserted = tree.put(
            self.__root, key, value, self.__less, self._fixup)
        if inserted:
            self.__count += 1
            self.__mutated()
        return Position(node), inserted

    def setdefault(self, key, default=None):
        node, inserted = tree.put(
            self.__root, key, default, self.__less, self._fixup)
        if inserted:
            self.__count += 1
            self.__mutated()
        return node.value

    def update(self, col=None, **kw):
        if col is not None:
            if hasattr(col, 'items'):
                col = col.items()
            for key, value in col:
                self[key] = value
        for key, value in kw.items():
            self[key] = value

    def __remove(self, node):
        successor = tree.remove(node, self._fixup)
        self.__count -= 1
        self.__mutated()
        return successor

    def erase(self, key):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is None:
            return 0
        self.__remove(node)
        return 1

    def erase_at(self, position):
        key = position.key
        node = tree.locate(self.__root, key, self.__less)
        if node is not position._node:
            raise KeyError(key)
        return Position(self.__remove(node))

    def __delitem__(self, key):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is None:
            raise KeyError(key)
        self.__remove(node)

    def pop(self, key, default=_MISSING):
        node = tree.locate(self.__root, key, self.__less)
        if node.left is None:
            if default is _MISSING:
                raise KeyError(key)
            return default

        value = node.value
        self.__remove(node)
        return value

    def popitem(self):
        node = self.__root.leftmost()
        if node is self.__root:
            raise KeyError('popitem(): map is empty')
        item = node.key, node.value
        self.__remove(node)
        return item

    def clear(self):
        self.__root = tree.Node()
        self.__root.expand()
        self.__count = 0
        self.__mutated()

    def copy(self):
        return type(self)(self)

    __copy__ = copy

    def assign(self, other):
        if other is self:
            return self
        if not isinstance(other, BSTMap):
            raise TypeError(
                'cannot assign {} to {}'.format(
                    type(other).__name__, type(self).__name__))

        # The new tree is built aside and swapped in only once complete.
        less = other.__less
        if other._balanced or not self._balanced:
            root = tree.clone(other.__root)
        else:
            root = tree.Node()
            root.expand()
            for node in other.__nodes():
                tree.put(root, node.key, node.value, less, self._fixup)

        self.__less = less
        self.__root = root
        self.__count = other.__count
        self.__mutated()
        return self

    def __nodes(self):
        end = self.__root
        node = end.leftmost()
        while node is not end:
            yield node
            node = node.next()

    def __reversed_nodes(self):
        node = self.__root.prev()
        while node is not None:
            yield node
            node = node.prev()

    def __iter__(self):
        for node in self.__nodes():
            yield node.key

    def __reversed__(self):
        for node in self.__reversed_nodes():
            yield node.key

    def keys(self):
        return MapView(self.__count, self.__iter__, self.__reversed__)

    def values(self):
        return MapView(
            self.__count,
            lambda: (node.value for node in self.__nodes()),
            lambda: (node.value for node in self.__reversed_nodes()))

    def items(self):
        return MapView(
            self.__count,
            lambda: ((node.key, node.value) for node in self.__nodes()),
            lambda: ((node.key, node.value)
                     for node in self.__reversed_nodes()))

    def __eq__(self, other):
        if not isinstance(other, BSTMap):
            return NotImplemented

        if len(self) != len(other):
            return False

        for node in self.__nodes():
            onode = tree.locate(other.__root, node.key, other.__less)
            if onode.left is None or onode.value != node.value:
                return False

        return True

    __hash__ = None

    def validate(self):
        count = tree.validate(self.__root, self.__less, self._balanced)
        if count != self.__count:
            raise tree.InvariantError(
                'tree holds {} entries but the map counts {}'.format(
                    count, self.__count))
        return self.height

    @reprlib.recursive_repr("{...}")
    def __repr__(self):
        items = []
        for key, val in self.items():
            items.append("{!r}: {!r}".format(key, val))
        return '<avlmap.{}({{{}}}) at 0x{:0x}>'.format(
            type(self).__name__, ', '.join(items), id(self))

    def __dump__(self):
        return tree.dump(self.__root)


class Map(BSTMap):
    """Ordered map on an AVL tree.

    Keys are ordered by `comparator`, a strict less-than relation that
    defaults to `operator.lt`; two keys are the same key when neither is
    less than the other.  Lookup, insertion and removal are O(log n).
    """

    _fixup = staticmethod(tree.rebalance)
    _balanced = True


collections.abc.MutableMapping.register(Map)
collections.abc.MutableMapping.register(BSTMap)
