"""Lookups and consistency checks over a subaccount snapshot.

Balances, products and health records are plain records reached by attribute.

- A spot or perp balance has ``product_id``, ``balance.amount`` and
  ``lp_balance.amount``. A perp balance also has ``balance.v_quote_balance``.
- A spot product has ``product_id``, ``book_info`` and ``state`` (the
  cumulative deposit and borrow multipliers and the normalized totals).
  Its ``lp_state`` has ``supply``, ``base.amount`` and ``quote.amount``.
- A perp product has ``product_id``, ``book_info``, ``risk``,
  ``oracle_price_x18`` and ``state`` (the cumulative fundings and
  ``open_interest``). Its ``lp_state`` has ``supply``, ``base`` and
  ``quote``.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

_QUOTE_PRODUCT_ID = 0
_QUOTE_BIAS_PERPS = (2, 4, 6)


class ProductNotFoundError(LookupError):
    """Raised when a balance or product for a product id is missing."""

    def __init__(self, what: str, product_id: int) -> None:
        super().__init__(f"{what} not found for product_id: {product_id}")
        self.what = what
        self.product_id = product_id


def _is_perp(product_id: int) -> bool:
    return product_id != _QUOTE_PRODUCT_ID and product_id % 2 == 0


def _find(items: Iterable[Any], product_id: int, what: str) -> Any:
    found = next((item for item in items if item.product_id == product_id), None)
    if found is None:
        raise ProductNotFoundError(what, product_id)
    return found


@dataclass
class SubaccountInfo:
    """A subaccount's balances, the products they refer to and its healths."""

    spot_balances: list[Any] = field(default_factory=list)
    perp_balances: list[Any] = field(default_factory=list)
    spot_products: list[Any] = field(default_factory=list)
    perp_products: list[Any] = field(default_factory=list)
    healths: list[Any] = field(default_factory=list)

    def get_spot_balance(self, product_id: int) -> Any:
        """Return the spot balance for ``product_id``."""
        return _find(self.spot_balances, product_id, "spot balance")

    def get_perp_balance(self, product_id: int) -> Any:
        """Return the perp balance for ``product_id``."""
        return _find(self.perp_balances, product_id, "perp balance")

    def get_spot_product(self, product_id: int) -> Any:
        """Return the spot product with ``product_id``."""
        return _find(self.spot_products, product_id, "spot product")

    def get_perp_product(self, product_id: int) -> Any:
        """Return the perp product with ``product_id``."""
        return _find(self.perp_products, product_id, "perp product")

    def _balance_for(self, product_id: int) -> Any:
        if _is_perp(product_id):
            return self.get_perp_balance(product_id)
        return self.get_spot_balance(product_id)

    def get_product_balances(self, product_ids: Sequence[int]) -> list[int]:
        """Return the balance amounts for ``product_ids``.

        The quote product's amount includes the virtual quote balances of
        perps 2, 4 and 6.
        """
        amounts = [self._balance_for(pid).balance.amount for pid in product_ids]
        quote_bias = sum(
            self.get_perp_balance(pid).balance.v_quote_balance
            for pid in _QUOTE_BIAS_PERPS
        )
        return [
            amount + quote_bias if pid == _QUOTE_PRODUCT_ID else amount
            for pid, amount in zip(product_ids, amounts)
        ]

    def get_lp_balances(self, product_ids: Sequence[int]) -> list[int]:
        """Return the LP balance amounts for ``product_ids``."""
        return [self._balance_for(pid).lp_balance.amount for pid in product_ids]

    def with_corrected_fees(
        self, spot_products: Sequence[Any], perp_products: Sequence[Any]
    ) -> SubaccountInfo:
        """Return a copy that takes its products from a full product listing.

        The listing must match this snapshot's products apart from collected
        fees and price increments; otherwise ``ValueError`` is raised.
        """
        for mine, theirs, label in (
            (self.spot_products, spot_products, "spot"),
            (self.perp_products, perp_products, "perp"),
        ):
            mine_cmp = copy.deepcopy(list(mine))
            for product in mine_cmp:
                product.book_info.price_increment_x18 = 0
            theirs_cmp = copy.deepcopy(list(theirs))
            for product in theirs_cmp:
                product.book_info.collected_fees = 0
            if mine_cmp != theirs_cmp:
                raise ValueError(f"{label} products do not match the listing")
        return dataclasses.replace(
            copy.deepcopy(self),
            spot_products=copy.deepcopy(list(spot_products)),
            perp_products=copy.deepcopy(list(perp_products)),
        )

    def validate_size_increments(self) -> None:
        """Check open interest and perp balances are multiples of size increments.

        Raises ``ValueError`` on the first value that is not.
        """
        increments: dict[int, int] = {}
        for product in self.perp_products:
            book = product.book_info
            if (
                book.size_increment == 0
                and product.risk.long_weight_initial_x18 == 0
                and product.oracle_price_x18 == 0
            ):
                continue  # placeholder product
            increments[product.product_id] = book.size_increment
            if product.state.open_interest % book.size_increment != 0:
                raise ValueError(
                    f"open interest of product {product.product_id} is not a "
                    f"multiple of its size increment"
                )
        for balance in self.perp_balances:
            increment = increments.get(balance.product_id)
            if increment is None:
                continue
            if balance.balance.amount % increment != 0:
                raise ValueError(
                    f"balance of product {balance.product_id} is not a "
                    f"multiple of its size increment"
                )

    def get_states(self, product_ids: Iterable[int]) -> list[list[int]]:
        """Return each product's state values.

        Perps give funding long, funding short and open interest; spots give
        deposit and borrow multipliers and normalized deposits and borrows.
        """
        states: list[list[int]] = []
        for pid in product_ids:
            if _is_perp(pid):
                state = self.get_perp_product(pid).state
                states.append(
                    [
                        state.cumulative_funding_long_x18,
                        state.cumulative_funding_short_x18,
                        state.open_interest,
                    ]
                )
            else:
                state = self.get_spot_product(pid).state
                states.append(
                    [
                        state.cumulative_deposits_multiplier_x18,
                        state.cumulative_borrows_multiplier_x18,
                        state.total_deposits_normalized,
                        state.total_borrows_normalized,
                    ]
                )
        return states

    def get_lp_states(self, product_ids: Iterable[int]) -> list[list[int]]:
        """Return each product's LP supply, base and quote."""
        states: list[list[int]] = []
        for pid in product_ids:
            if _is_perp(pid):
                lp = self.get_perp_product(pid).lp_state
                states.append([lp.supply, lp.base, lp.quote])
            else:
                lp = self.get_spot_product(pid).lp_state
                states.append([lp.supply, lp.base.amount, lp.quote.amount])
        return states

    def get_health_info(self) -> tuple[Any, Any, Any]:
        """Return copies of the initial, maintenance and unweighted healths."""
        first, second, third = self.healths[0], self.healths[1], self.healths[2]
        return copy.deepcopy(first), copy.deepcopy(second), copy.deepcopy(third)