from typing import Any, Iterable, List

from stroom import Continue, Suspend, Suspended, reduce, resource


def append_step(element: Any, acc: List[Any]):
    """A consumer step collecting elements into a new list."""
    return Continue(acc + [element])


def to_list(enumerable: Any) -> List[Any]:
    """Reduces any producer or iterable to a list without ever suspending."""
    return reduce(enumerable, Continue([]), append_step).acc


def to_list_suspending(enumerable: Any, every: int = 1) -> List[Any]:
    """
    Reduces to a list, suspending after every `every` elements and resuming
    the returned continuation with `Continue` each time.
    """

    def step(element, acc):
        acc = acc + [element]
        if len(acc) % every == 0:
            return Suspend(acc)
        return Continue(acc)

    outcome = reduce(enumerable, Continue([]), step)
    while isinstance(outcome, Suspended):
        outcome = outcome.continuation(Continue(outcome.acc))
    return outcome.acc


class CountingIterable:
    """An iterable that records how many elements have been pulled from it."""

    def __init__(self, iterable: Iterable[Any]):
        self.iterable = iterable
        self.pulled = 0

    def __iter__(self):
        for item in self.iterable:
            self.pulled += 1
            yield item


class ResourceTracker:
    """
    Builds `resource` producers over a list of items and counts how often the
    resource is acquired and released.
    """

    def __init__(self, items: Iterable[Any], fail_at: int = -1, release_error: Exception = None):
        self.items = list(items)
        self.fail_at = fail_at
        self.release_error = release_error
        self.acquired = 0
        self.released = 0

    def acquire(self):
        self.acquired += 1
        return {"position": 0, "id": self.acquired}

    def next_item(self, handle):
        position = handle["position"]
        if position == self.fail_at:
            raise RuntimeError(f"read failed at {position}")
        if position >= len(self.items):
            return None
        handle["position"] = position + 1
        return self.items[position], handle

    def release(self, handle):
        self.released += 1
        if self.release_error is not None:
            raise self.release_error

    def producer(self):
        return resource(self.acquire, self.next_item, self.release)
