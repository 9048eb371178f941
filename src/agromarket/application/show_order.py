"""Application service: order queries."""

from __future__ import annotations

from agromarket.application.dto import OrderDTO, order_to_dto
from agromarket.domain.model.order import Order
from agromarket.domain.model.product import Product
from agromarket.domain.repository.product_repository import ProductRepository
from agromarket.domain.repository.unit_of_work import UnitOfWork


def current_products(
    product_repo: ProductRepository,
    orders: list[Order],
) -> dict[str, Product]:
    """Current listing for every product referenced by *orders*."""
    products: dict[str, Product] = {}
    for order in orders:
        for line in order.lines:
            if line.product_id in products:
                continue
            product = product_repo.get_by_id(line.product_id)
            if product is not None:
                products[line.product_id] = product
    return products


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get(order_id)
            products = current_products(self._uow.products, [order])
        return order_to_dto(order, products)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str | None = None,
        farmer_id: str | None = None,
    ) -> list[OrderDTO]:
        """List orders, newest first.

        Args:
            user_id: only orders placed by this customer.
            farmer_id: only orders containing this farmer's products.
        """
        with self._uow:
            if user_id is not None:
                orders = self._uow.orders.list_for_user(user_id)
                if farmer_id is not None:
                    orders = [o for o in orders if o.lines_for_farmer(farmer_id)]
            elif farmer_id is not None:
                orders = self._uow.orders.list_for_farmer(farmer_id)
            else:
                orders = self._uow.orders.list_all()
            products = current_products(self._uow.products, orders)
        return [order_to_dto(order, products) for order in orders]
