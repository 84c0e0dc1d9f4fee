from functools import partial

import pytest

from banded_lcs import merge_all_sequences
from order_search import best_of, lexicographic_permutations, next_permutation, search_orders


def last_item(order):
    return order[-1]


def test_next_permutation_in_place():
    items = [1, 3, 2]
    assert next_permutation(items)
    assert items == [2, 1, 3]
    items = [3, 2, 1]
    assert not next_permutation(items)
    assert items == [3, 2, 1]


def test_lexicographic_permutations():
    assert list(lexicographic_permutations([3, 1, 2])) == [
        (1, 2, 3), (1, 3, 2), (2, 1, 3), (2, 3, 1), (3, 1, 2), (3, 2, 1),
    ]


def test_lexicographic_permutations_skip_repeats():
    assert list(lexicographic_permutations(['b', 'a', 'a'])) == [
        ('a', 'a', 'b'), ('a', 'b', 'a'), ('b', 'a', 'a'),
    ]
    assert list(lexicographic_permutations([])) == [()]
    assert list(lexicographic_permutations(['x'])) == [('x',)]


def test_first_order_wins_ties():
    assert search_orders(['b', 'a', 'c'], ''.join) == (('a', 'b', 'c'), 'abc')


def test_only_strictly_better_replaces():
    order, value = search_orders([1, 2, 3], tuple, key=last_item)
    assert order == (2, 3, 1)
    assert value == (2, 3, 1)


def test_best_of_needs_orders():
    with pytest.raises(ValueError):
        best_of([], ''.join)


def test_orders_are_evaluated_while_enumerating():
    produced = []
    seen_at_first_call = []

    def counted_orders():
        for order in lexicographic_permutations('abcdefg'):
            produced.append(order)
            yield order

    def evaluate(order):
        if not seen_at_first_call:
            seen_at_first_call.append(len(produced))
        return ''.join(order)

    order, value = best_of(counted_orders(), evaluate)
    assert seen_at_first_call == [1]
    assert len(produced) == 5040
    assert order == tuple('abcdefg')
    assert value == 'abcdefg'


def test_best_of_accepts_generators_with_workers():
    merge = partial(merge_all_sequences, threshold=4)
    sequences = ['ABCBDAB', 'BDCABA', 'BCBDAB']
    expected = best_of(list(lexicographic_permutations(sequences)), merge)
    assert best_of(lexicographic_permutations(sequences), merge, num_workers=2) == expected


def test_empty_input_searches_one_order():
    merge = partial(merge_all_sequences, threshold=3)
    assert search_orders([], merge) == ((), '')


def test_best_length_never_grows():
    merge = partial(merge_all_sequences, threshold=10)
    orders = list(lexicographic_permutations(['AGGTAB', 'GXTXAYB', 'GTAB']))
    lengths = [len(best_of(orders[:n], merge)[1]) for n in range(1, len(orders) + 1)]
    assert lengths == sorted(lengths, reverse=True)


def test_duplicate_sequence_does_not_lengthen_result():
    merge = partial(merge_all_sequences, threshold=10)
    _, best = search_orders(['AGGTAB', 'GXTXAYB', 'AGGTAB'], merge)
    assert len(best) <= len(merge_all_sequences(['AGGTAB', 'GXTXAYB'], 10))


def test_process_pool_keeps_sequential_result():
    sequences = ['ABCBDAB', 'BDCABA', 'BCBDAB', 'ABDCAB']
    merge = partial(merge_all_sequences, threshold=4)
    assert search_orders(sequences, merge, num_workers=2) == search_orders(sequences, merge)
