import math
import random

import avlmap


MAGIC = 20
TREE_MAX_SIZE = random.randint(MAGIC, MAGIC * 50)
INTEGER_MAX = random.randint(1, MAGIC * 10_000)
STEPS = 10_000
KEY_SPACE = 256


def avl_height_bound(count):
    return 1.45 * math.log2(count + 2)


def check_against_dict(m, expected):
    assert len(m) == len(expected)
    assert tuple(m.items()) == tuple(sorted(expected.items()))


def random_mutations(map_type, steps):
    m = map_type()
    expected = dict()
    for _ in range(steps):
        key = random.randrange(KEY_SPACE)
        if random.random() < 0.55:
            value = random.random()
            m[key] = value
            expected[key] = value
        else:
            assert m.erase(key) == (1 if key in expected else 0)
            expected.pop(key, None)
        m.validate()
    check_against_dict(m, expected)
    return m


def test_random_inserts_and_erases_stay_valid():
    m = random_mutations(avlmap.Map, STEPS)
    assert m.height <= avl_height_bound(len(m))


def test_random_inserts_and_erases_stay_valid_without_balancing():
    random_mutations(avlmap.BSTMap, STEPS // 10)


def test_balanced_and_sorted_random_trees_of_integers():
    for _ in range(MAGIC):
        # given
        expected = dict()
        m = avlmap.Map()
        for i in range(TREE_MAX_SIZE):
            key = value = random.randint(-INTEGER_MAX, INTEGER_MAX)
            m[key] = value
            expected[key] = value
        # then
        m.validate()
        check_against_dict(m, expected)


def test_balanced_and_sorted_random_trees_of_floats():
    for _ in range(MAGIC):
        # given
        expected = dict()
        m = avlmap.Map()
        for i in range(TREE_MAX_SIZE):
            key = value = random.uniform(-INTEGER_MAX, INTEGER_MAX)
            m[key] = value
            expected[key] = value
        # then
        m.validate()
        check_against_dict(m, expected)


def test_random_erase_at_keeps_order():
    m = avlmap.Map()
    keys = random.sample(range(INTEGER_MAX * 2 + TREE_MAX_SIZE), TREE_MAX_SIZE)
    for key in keys:
        m[key] = key
    remaining = sorted(keys)

    while remaining:
        index = random.randrange(len(remaining))
        pos = m.erase_at(m.find(remaining[index]))
        del remaining[index]
        if index < len(remaining):
            assert pos.key == remaining[index]
        else:
            assert pos == m.end()
        m.validate()

    assert len(m) == 0
    assert m.begin() == m.end()


def test_sorted_input_stays_logarithmic():
    m = avlmap.Map()
    for key in range(4096):
        m[key] = key
    m.validate()
    assert m.height <= avl_height_bound(4096)

    for key in range(4096):
        if key % 2:
            m.erase(key)
    m.validate()
    assert len(m) == 2048
    assert m.height <= avl_height_bound(2048)
