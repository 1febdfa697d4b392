# vertexutils

Helpers for the data of an order-book exchange engine:

- `vertexutils.tx`: the `TxType` codes, the `VertexTx` transaction wrapper
  with its `VertexTxKind`, and EIP-712 signing domains and digests
  (`Eip712Domain`, `domain`, `domain2`, `get_eip712_digest`). Hashing uses
  keccak-256 from pycryptodome.
- `vertexutils.trigger`: trigger order statuses and criteria
  (`TriggerOrderStatus`, `TriggerOrderStatusKind`, `TriggerCriteria`,
  `TriggerCriteriaKind`, `CancelReason`), their numeric codes and the JSON
  encoding of a status.
- `vertexutils.subaccount_info`: `SubaccountInfo`, for looking up balances,
  products, states, LP states and health records of a subaccount, and for
  checking a snapshot against a full product listing. A missing product id
  raises `ProductNotFoundError` (a `LookupError`).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Transaction types

```python
from vertexutils.tx import TxType, VertexTx, VertexTxKind

assert TxType.from_u8(6) is TxType.MATCH_ORDERS   # unknown codes raise ValueError

tx = VertexTx(VertexTxKind.MATCH_ORDERS, payload={"any": "payload"})
assert tx.tx_type() is TxType.MATCH_ORDERS
```

`EXECUTE_SLOW_MODE`, `DUMP_FEES` and `OTHER` carry no payload. Calling
`tx_type()` on an `OTHER` transaction raises `ValueError`.

## EIP-712 domains and digests

```python
from vertexutils.tx import domain2, get_eip712_digest

dom = domain2(42161, bytes(20))   # name "Vertex", version "0.0.1"
separator = dom.separator()       # 32-byte domain separator


class Payload:
    def struct_hash(self) -> bytes:
        return bytes(32)


digest = get_eip712_digest(Payload(), dom)
assert len(digest) == 32
```

`domain` also accepts the contract address as a hex string; `domain2`
requires raw bytes and a chain id within 64 bits. Any object with a
`struct_hash()` method returning 32 bytes can be digested.

## Trigger orders

```python
from vertexutils.trigger import (
    CancelReason,
    TriggerCriteria,
    TriggerCriteriaKind,
    TriggerOrderStatus,
    TriggerOrderStatusKind,
)

status = TriggerOrderStatus.from_status_data(b'"pending"')
assert status.pending() and status.byte() == 0
assert TriggerOrderStatus.byte_from_str("cancelled") == 3

cancelled = TriggerOrderStatus(TriggerOrderStatusKind.CANCELLED, CancelReason.EXPIRED)
assert cancelled.data() == b'{"cancelled":"expired"}'

criteria = TriggerCriteria(TriggerCriteriaKind.PRICE_BELOW, 25)
assert criteria.byte() == 1
assert criteria.price() == "25".rjust(40, "0")
```

## Subaccount lookups

Balances, products and health records are any objects reached by attribute;
the docstring of `vertexutils.subaccount_info` lists the fields each needs.

```python
from types import SimpleNamespace as NS

from vertexutils.subaccount_info import ProductNotFoundError, SubaccountInfo


def balance(product_id, amount, v_quote=0):
    return NS(
        product_id=product_id,
        balance=NS(amount=amount, v_quote_balance=v_quote),
        lp_balance=NS(amount=0),
    )


info = SubaccountInfo(
    spot_balances=[balance(0, 1000), balance(1, 5)],
    perp_balances=[balance(2, 10, v_quote=-3), balance(4, 0, v_quote=7), balance(6, 0)],
)

# Even non-zero ids are perps; the quote product (0) includes the virtual
# quote balances of perps 2, 4 and 6, which must therefore be present.
assert info.get_product_balances([0, 1, 2]) == [1004, 5, 10]

try:
    info.get_spot_product(99)
except ProductNotFoundError as exc:
    print(exc)   # spot product not found for product_id: 99
```

`validate_size_increments()` and `with_corrected_fees()` raise `ValueError`
when the snapshot is inconsistent.

## What it does not do

The package does not talk to an exchange engine, place or cancel orders, or
define the order, cancellation and endpoint payload records: `VertexTx`
holds its payload as given, and `get_eip712_digest` relies on the payload to
supply its own struct hash. There is no command-line tool.