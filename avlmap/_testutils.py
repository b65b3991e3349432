class OrderKey:
    _crasher = None

    def __init__(self, order, name, *, error_on_lt_to=None):
        self.name = name
        self.order = order
        self.error_on_lt_to = error_on_lt_to

    def __repr__(self):
        if self._crasher is not None and self._crasher.error_on_repr:
            raise ReprError
        return '<Key name:{} order:{}>'.format(self.name, self.order)

    def __lt__(self, other):
        if not isinstance(other, OrderKey):
            return NotImplemented

        if self._crasher is not None and self._crasher.error_on_lt:
            raise CompareError

        if self.error_on_lt_to is not None and self.error_on_lt_to is other:
            raise ValueError('cannot compare {!r} to {!r}'.format(self, other))
        if other.error_on_lt_to is not None and other.error_on_lt_to is self:
            raise ValueError('cannot compare {!r} to {!r}'.format(other, self))

        # Keys of equal order are the same key as far as a map is
        # concerned, whatever their names.
        return self.order < other.order


class KeyInt(int):

    def __lt__(self, other):
        if OrderKey._crasher is not None and OrderKey._crasher.error_on_lt:
            raise CompareError
        return super().__lt__(other)

    def __repr__(self):
        if OrderKey._crasher is not None and OrderKey._crasher.error_on_repr:
            raise ReprError
        return super().__repr__()


class OrderKeyCrasher:

    def __init__(self, *, error_on_lt=False, error_on_repr=False):
        self.error_on_lt = error_on_lt
        self.error_on_repr = error_on_repr

    def __enter__(self):
        if OrderKey._crasher is not None:
            raise RuntimeError('cannot nest crashers')
        OrderKey._crasher = self

    def __exit__(self, *exc):
        OrderKey._crasher = None


class CompareError(Exception):
    pass


class ReprError(Exception):
    pass
