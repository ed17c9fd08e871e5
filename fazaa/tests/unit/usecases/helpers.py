from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple, Union

from fazaa.domain.orders import Order, OrderStatus, OrdersPage

Outcome = Union[OrdersPage, BaseException]


def make_orders(count: int, *, start: int = 1, status: OrderStatus = OrderStatus.NEW) -> Tuple[Order, ...]:
    return tuple(
        Order(id=idx, title=f"Order {idx}", order_no=str(1000 + idx), status=status)
        for idx in range(start, start + count)
    )


class ManualRunner:
    """Background runner that queues jobs until the test runs them."""

    def __init__(self) -> None:
        self.jobs: List[Callable[[], None]] = []

    def __call__(self, job: Callable[[], None]) -> None:
        self.jobs.append(job)

    def run_next(self) -> None:
        self.jobs.pop(0)()

    def run_last(self) -> None:
        self.jobs.pop()()

    def run_all(self) -> None:
        while self.jobs:
            self.run_next()


class ScriptedFetch:
    """Order-query collaborator answering from a ``(status, page)`` script."""

    def __init__(self, responses: Optional[Dict[Tuple[Optional[str], int], Outcome]] = None) -> None:
        self.responses: Dict[Tuple[Optional[str], int], Outcome] = dict(responses or {})
        self.calls: List[Tuple[Optional[str], int, int]] = []

    def __call__(self, status: Optional[str], page: int, limit: int) -> OrdersPage:
        self.calls.append((status, page, limit))
        outcome = self.responses[(status, page)]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


__all__ = ["ManualRunner", "ScriptedFetch", "make_orders"]
