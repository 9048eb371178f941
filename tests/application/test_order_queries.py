"""Integration tests for order deletion, queries and cancellation notices."""

import pytest

from agromarket.application.cancellation_notices import (
    CountUnviewedCancellationsHandler,
    MarkCancellationsViewedHandler,
)
from agromarket.application.delete_order import DeleteCancelledOrderHandler
from agromarket.application.dto import CartLineSpec, CustomerInfo
from agromarket.application.place_order import PlaceOrderHandler
from agromarket.application.show_order import ListOrdersHandler, ShowOrderHandler
from agromarket.application.transition_order import TransitionOrderHandler
from agromarket.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidStateError,
    ValidationError,
)
from agromarket.domain.model.product import Product
from tests.fakes import FakeDispatcher, FakeUnitOfWork


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork(products=[
        Product.create(product_id="p1", farmer_id="f1", name="Eggs", stock=200),
        Product.create(product_id="p2", farmer_id="f2", name="Cheese", stock=200),
    ])


def _place(uow: FakeUnitOfWork, user_id: str, *lines: tuple[str, int]) -> str:
    dto = PlaceOrderHandler(uow, FakeDispatcher()).handle(
        customer=CustomerInfo(name=user_id),
        delivery_slot="tuesday-pm",
        logistics_mode="platform-delivery",
        cart=[CartLineSpec(pid, qty) for pid, qty in lines],
        user_id=user_id,
    )
    return dto.id


def _cancel(uow: FakeUnitOfWork, order_id: str) -> None:
    TransitionOrderHandler(uow, FakeDispatcher()).handle(order_id, "cancelled", "no stock")


class TestDeleteCancelledOrder:

    def test_owner_deletes_cancelled_order(self):
        uow = _setup()
        order_id = _place(uow, "u1", ("p1", 10))
        _cancel(uow, order_id)

        DeleteCancelledOrderHandler(uow).handle(order_id, "u1")

        assert uow.orders.get_by_id(order_id) is None
        # Stock was restored at cancellation; deletion leaves it alone
        assert uow.products.get_stock("p1") == 200

    def test_other_user_forbidden(self):
        uow = _setup()
        order_id = _place(uow, "u1", ("p1", 10))
        _cancel(uow, order_id)

        with pytest.raises(ForbiddenError):
            DeleteCancelledOrderHandler(uow).handle(order_id, "u2")

        assert uow.orders.get_by_id(order_id) is not None

    def test_open_order_cannot_be_deleted(self):
        uow = _setup()
        order_id = _place(uow, "u1", ("p1", 10))

        with pytest.raises(InvalidStateError, match="Only cancelled orders"):
            DeleteCancelledOrderHandler(uow).handle(order_id, "u1")

    def test_unknown_order(self):
        with pytest.raises(EntityNotFoundError):
            DeleteCancelledOrderHandler(_setup()).handle("nope", "u1")


class TestOrderQueries:

    def test_show_hydrates_current_product(self):
        uow = _setup()
        order_id = _place(uow, "u1", ("p1", 5))

        dto = ShowOrderHandler(uow).handle(order_id)

        assert dto.lines[0].product_name == "Eggs"
        assert dto.lines[0].product.stock == 195

    def test_show_unknown(self):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(_setup()).handle("nope")

    def test_list_by_user(self):
        uow = _setup()
        mine = _place(uow, "u1", ("p1", 1))
        _place(uow, "u2", ("p1", 1))

        dtos = ListOrdersHandler(uow).handle(user_id="u1")

        assert [d.id for d in dtos] == [mine]

    def test_list_by_farmer(self):
        uow = _setup()
        with_cheese = _place(uow, "u1", ("p1", 1), ("p2", 1))
        _place(uow, "u2", ("p1", 1))

        dtos = ListOrdersHandler(uow).handle(farmer_id="f2")

        assert [d.id for d in dtos] == [with_cheese]

    def test_list_all(self):
        uow = _setup()
        _place(uow, "u1", ("p1", 1))
        _place(uow, "u2", ("p2", 1))

        assert len(ListOrdersHandler(uow).handle()) == 2


class TestCancellationNotices:

    def test_count_and_mark(self):
        uow = _setup()
        first = _place(uow, "u1", ("p1", 1))
        second = _place(uow, "u1", ("p2", 1))
        _place(uow, "u1", ("p1", 1))
        _cancel(uow, first)
        _cancel(uow, second)

        assert CountUnviewedCancellationsHandler(uow).handle("u1") == 2
        assert MarkCancellationsViewedHandler(uow).handle("u1") == 2
        assert CountUnviewedCancellationsHandler(uow).handle("u1") == 0
        assert uow.orders.get(first).cancellation_viewed is True

    def test_other_users_not_counted(self):
        uow = _setup()
        _cancel(uow, _place(uow, "u2", ("p1", 1)))

        assert CountUnviewedCancellationsHandler(uow).handle("u1") == 0

    def test_user_required(self):
        with pytest.raises(ValidationError, match="user id is required"):
            CountUnviewedCancellationsHandler(_setup()).handle(" ")
