"""Transaction kinds and EIP-712 domain hashing."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Protocol

from Crypto.Hash import keccak

_UINT256_MAX = 2**256 - 1
_UINT64_MAX = 2**64 - 1
_ADDRESS_LEN = 20
_WORD_LEN = 32


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def _to_address(value: bytes | bytearray | str) -> bytes:
    if isinstance(value, str):
        text = value[2:] if value.lower().startswith("0x") else value
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError(f"invalid address: {value!r}") from exc
    else:
        raw = bytes(value)
    if len(raw) != _ADDRESS_LEN:
        raise ValueError(f"address must be {_ADDRESS_LEN} bytes, got {len(raw)}")
    return raw


class TxType(enum.IntEnum):
    """Numeric identifiers of the transaction kinds."""

    LIQUIDATE_SUBACCOUNT = 0
    DEPOSIT_COLLATERAL = 1
    WITHDRAW_COLLATERAL = 2
    SPOT_TICK = 3
    UPDATE_PRICE = 4
    SETTLE_PNL = 5
    MATCH_ORDERS = 6
    DEPOSIT_INSURANCE = 7
    EXECUTE_SLOW_MODE = 8
    MINT_LP = 9
    BURN_LP = 10
    SWAP_AMM = 11
    MATCH_ORDER_AMM = 12
    DUMP_FEES = 13
    CLAIM_SEQUENCER_FEES = 14
    PERP_TICK = 15
    MANUAL_ASSERT = 16
    REBATE = 17
    UPDATE_PRODUCT = 18
    LINK_SIGNER = 19
    UPDATE_FEE_RATES = 20
    BURN_LP_AND_TRANSFER = 21
    MATCH_ORDERS_RFQ = 22
    TRANSFER_QUOTE = 23
    REBALANCE_X_WITHDRAW = 24
    UPDATE_MIN_DEPOSIT_RATE = 25
    ASSERT_CODE = 26
    WITHDRAW_INSURANCE = 27
    CREATE_ISOLATED_SUBACCOUNT = 28

    @classmethod
    def from_u8(cls, n: int) -> TxType:
        """Return the transaction type with numeric identifier ``n``."""
        try:
            return cls(n)
        except ValueError:
            raise ValueError(f"Invalid TxType: {n}") from None


@dataclass(frozen=True)
class Eip712Domain:
    """An EIP-712 signing domain; unset fields are left out of the hash."""

    name: str | None = None
    version: str | None = None
    chain_id: int | None = None
    verifying_contract: bytes | None = None
    salt: bytes | None = None

    def __post_init__(self) -> None:
        if self.chain_id is not None and not 0 <= self.chain_id <= _UINT256_MAX:
            raise ValueError(f"chain id out of uint256 range: {self.chain_id}")
        if self.verifying_contract is not None:
            object.__setattr__(
                self, "verifying_contract", _to_address(self.verifying_contract)
            )
        if self.salt is not None:
            salt = bytes(self.salt)
            if len(salt) != _WORD_LEN:
                raise ValueError(f"salt must be {_WORD_LEN} bytes, got {len(salt)}")
            object.__setattr__(self, "salt", salt)

    def separator(self) -> bytes:
        """Return the 32-byte domain separator."""
        fields: list[str] = []
        encoded: list[bytes] = []
        if self.name is not None:
            fields.append("string name")
            encoded.append(_keccak256(self.name.encode()))
        if self.version is not None:
            fields.append("string version")
            encoded.append(_keccak256(self.version.encode()))
        if self.chain_id is not None:
            fields.append("uint256 chainId")
            encoded.append(self.chain_id.to_bytes(_WORD_LEN, "big"))
        if self.verifying_contract is not None:
            fields.append("address verifyingContract")
            encoded.append(self.verifying_contract.rjust(_WORD_LEN, b"\x00"))
        if self.salt is not None:
            fields.append("bytes32 salt")
            encoded.append(self.salt)
        type_hash = _keccak256(f"EIP712Domain({','.join(fields)})".encode())
        return _keccak256(type_hash + b"".join(encoded))


class _Eip712Payload(Protocol):
    def struct_hash(self) -> bytes: ...


def get_eip712_digest(payload: _Eip712Payload, domain: Eip712Domain) -> bytes:
    """Return the EIP-712 digest of ``payload`` signed under ``domain``."""
    struct_hash = bytes(payload.struct_hash())
    if len(struct_hash) != _WORD_LEN:
        raise ValueError(
            f"struct hash must be {_WORD_LEN} bytes, got {len(struct_hash)}"
        )
    return _keccak256(b"\x19\x01" + domain.separator() + struct_hash)


def domain(chain_id: int, verifying_contract: bytes | str) -> Eip712Domain:
    """Return the Vertex signing domain for a chain and contract."""
    return Eip712Domain(
        name="Vertex",
        version="0.0.1",
        chain_id=chain_id,
        verifying_contract=_to_address(verifying_contract),
    )


def domain2(chain_id: int, verifying_contract: bytes) -> Eip712Domain:
    """Like :func:`domain`, for a 64-bit chain id and a raw 20-byte address."""
    if not 0 <= chain_id <= _UINT64_MAX:
        raise ValueError(f"chain id out of uint64 range: {chain_id}")
    if isinstance(verifying_contract, str):
        raise TypeError("verifying contract must be raw bytes")
    return domain(chain_id, verifying_contract)


class VertexTxKind(enum.Enum):
    """Kinds of transaction carried by :class:`VertexTx`."""

    LIQUIDATE_SUBACCOUNT = "liquidate_subaccount"
    LINK_SIGNER = "link_signer"
    DEPOSIT_COLLATERAL = "deposit_collateral"
    WITHDRAW_COLLATERAL = "withdraw_collateral"
    SETTLE_PNL = "settle_pnl"
    PERP_TICK = "perp_tick"
    SPOT_TICK = "spot_tick"
    UPDATE_PRICE = "update_price"
    MANUAL_ASSERT = "manual_assert"
    MATCH_ORDERS = "match_orders"
    EXECUTE_SLOW_MODE = "execute_slow_mode"
    MINT_LP = "mint_lp"
    BURN_LP = "burn_lp"
    SWAP_AMM = "swap_a_m_m"
    BURN_LP_AND_TRANSFER = "burn_lp_and_transfer"
    MATCH_ORDERS_RFQ = "match_orders_r_f_q"
    TRANSFER_QUOTE = "transfer_quote"
    REBALANCE_X_WITHDRAW = "rebalance_x_withdraw"
    UPDATE_MIN_DEPOSIT_RATE = "update_min_deposit_rate"
    DUMP_FEES = "dump_fees"
    CLAIM_SEQUENCER_FEES = "claim_sequencer_fees"
    ASSERT_CODE = "assert_code"
    WITHDRAW_INSURANCE = "withdraw_insurance"
    CREATE_ISOLATED_SUBACCOUNT = "create_isolated_subaccount"
    OTHER = "other"


_UNIT_KINDS = frozenset(
    {VertexTxKind.EXECUTE_SLOW_MODE, VertexTxKind.DUMP_FEES, VertexTxKind.OTHER}
)


@dataclass(frozen=True)
class VertexTx:
    """A transaction of some kind together with its endpoint payload."""

    kind: VertexTxKind
    payload: Any = None

    def __post_init__(self) -> None:
        if self.kind in _UNIT_KINDS and self.payload is not None:
            raise ValueError(f"{self.kind.value} carries no payload")

    def tx_type(self) -> TxType:
        """Return the numeric transaction type of this transaction."""
        if self.kind is VertexTxKind.OTHER:
            raise ValueError("Other is not a valid tx type")
        return TxType[self.kind.name]