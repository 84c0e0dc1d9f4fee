import logging
from concurrent.futures import ProcessPoolExecutor
from itertools import islice
from typing import Any, Callable, Iterable, Iterator, List, Tuple

'''
Exhaustive search over merge orders.

Nothing here knows about strings: an order is any tuple of items, evaluate turns an order
into a value and key scores that value. The best order is the first one, in enumeration
order, whose score is strictly lower than every score seen before it. Orders are evaluated
as they are enumerated, so only one arrangement (or one batch with worker processes) is held
at a time.
'''

BATCH_PER_WORKER = 64
BATCH_CHUNKSIZE = 8


def next_permutation(items: List[Any]) -> bool:
    '''Rearrange items into the next lexicographically greater order, in place.'''
    i = len(items) - 2
    while i >= 0 and not items[i] < items[i + 1]:
        i -= 1
    if i < 0:
        return False
    j = len(items) - 1
    while not items[i] < items[j]:
        j -= 1
    items[i], items[j] = items[j], items[i]
    items[i + 1:] = reversed(items[i + 1:])
    return True


def lexicographic_permutations(items: Iterable[Any]) -> Iterator[Tuple[Any, ...]]:
    # Equal items never produce repeated arrangements.
    current = sorted(items)
    yield tuple(current)
    while next_permutation(current):
        yield tuple(current)


def evaluate_in_batches(orders: Iterable[Tuple[Any, ...]], evaluate: Callable,
                        num_workers: int) -> Iterator[Tuple[Tuple[Any, ...], Any]]:
    '''Yield (order, value) pairs in enumeration order, holding one batch of orders at a time.'''
    orders = iter(orders)
    batch_size = num_workers * BATCH_PER_WORKER
    with ProcessPoolExecutor(max_workers=num_workers) as executor:
        while True:
            batch = list(islice(orders, batch_size))
            if not batch:
                return
            # map() yields in submission order, which keeps the tie-break deterministic.
            yield from zip(batch, executor.map(evaluate, batch, chunksize=BATCH_CHUNKSIZE))


def best_of(orders: Iterable[Tuple[Any, ...]], evaluate: Callable, key: Callable = len,
            num_workers: int = 1) -> Tuple[Tuple[Any, ...], Any]:
    '''Return (order, value) of the first order whose value has the lowest key.'''
    if num_workers <= 1:
        pairs = ((order, evaluate(order)) for order in orders)
    else:
        pairs = evaluate_in_batches(orders, evaluate, num_workers)

    def pick_first_best(pairs):
        best_order, best_value, best_score = None, None, None
        count = 0
        for order, value in pairs:
            count += 1
            score = key(value)
            if count == 1 or score < best_score:
                best_order, best_value, best_score = order, value, score
        return count, best_order, best_value

    count, best_order, best_value = pick_first_best(pairs)
    if not count:
        raise ValueError('No orders to search.')
    logging.info(f'Searched {count} orders using {num_workers} worker(s)')
    return best_order, best_value


def search_orders(items: Iterable[Any], evaluate: Callable, key: Callable = len,
                  num_workers: int = 1) -> Tuple[Tuple[Any, ...], Any]:
    return best_of(lexicographic_permutations(items), evaluate, key=key, num_workers=num_workers)
