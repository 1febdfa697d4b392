import pytest

from vertexutils.tx import (
    Eip712Domain,
    TxType,
    VertexTx,
    VertexTxKind,
    domain,
    domain2,
    get_eip712_digest,
)

MAIL_CONTRACT = bytes.fromhex("cc" * 20)
MAIL_DOMAIN = Eip712Domain(
    name="Ether Mail", version="1", chain_id=1, verifying_contract=MAIL_CONTRACT
)
MAIL_STRUCT_HASH = bytes.fromhex(
    "c52c0ee5d84264471806290a3f2c4cecfc5490626bf912d01f240d7a274b371e"
)


class _Payload:
    def __init__(self, digest: bytes) -> None:
        self._digest = digest

    def struct_hash(self) -> bytes:
        return self._digest


@pytest.mark.parametrize("n", range(29))
def test_from_u8_round_trip(n):
    assert TxType.from_u8(n).value == n


@pytest.mark.parametrize("n", [29, 255, -1])
def test_from_u8_rejects_unknown(n):
    with pytest.raises(ValueError):
        TxType.from_u8(n)


def test_from_u8_specific_members():
    assert TxType.from_u8(22) is TxType.MATCH_ORDERS_RFQ
    assert TxType.from_u8(28) is TxType.CREATE_ISOLATED_SUBACCOUNT


@pytest.mark.parametrize(
    "kind", [k for k in VertexTxKind if k is not VertexTxKind.OTHER]
)
def test_tx_type_matches_kind(kind):
    payload = None if kind in (VertexTxKind.EXECUTE_SLOW_MODE, VertexTxKind.DUMP_FEES) else {}
    assert VertexTx(kind, payload).tx_type().name == kind.name


def test_tx_type_values():
    assert VertexTx(VertexTxKind.MATCH_ORDERS_RFQ, {}).tx_type() == 22
    assert VertexTx(VertexTxKind.DUMP_FEES).tx_type() == 13


def test_other_has_no_tx_type():
    with pytest.raises(ValueError):
        VertexTx(VertexTxKind.OTHER).tx_type()


def test_unit_kind_rejects_payload():
    with pytest.raises(ValueError):
        VertexTx(VertexTxKind.EXECUTE_SLOW_MODE, {"x": 1})


def test_kind_value_round_trip():
    for kind in VertexTxKind:
        assert VertexTxKind(kind.value) is kind


def test_mail_domain_separator():
    assert MAIL_DOMAIN.separator() == bytes.fromhex(
        "f2cee375fa42b42143804025fc449deafd50cc031ca257e0b194a650a912090f"
    )


def test_mail_digest():
    digest = get_eip712_digest(_Payload(MAIL_STRUCT_HASH), MAIL_DOMAIN)
    assert digest == bytes.fromhex(
        "be609aee343fb3c4b28e1df9e632fca64fcfaede20f02e86244efddf30957bd2"
    )


def test_digest_rejects_bad_struct_hash():
    with pytest.raises(ValueError):
        get_eip712_digest(_Payload(b"\x00" * 31), MAIL_DOMAIN)


def test_digest_depends_on_domain():
    payload = _Payload(MAIL_STRUCT_HASH)
    a = get_eip712_digest(payload, domain(1, MAIL_CONTRACT))
    b = get_eip712_digest(payload, domain(2, MAIL_CONTRACT))
    assert len(a) == 32
    assert a != b


def test_domain_fields():
    d = domain(42161, MAIL_CONTRACT)
    assert d.name == "Vertex"
    assert d.version == "0.0.1"
    assert d.chain_id == 42161
    assert d.verifying_contract == MAIL_CONTRACT
    assert d.salt is None


def test_domain_accepts_hex_address():
    assert domain(1, "0x" + "cc" * 20) == domain(1, MAIL_CONTRACT)


def test_domain2_equals_domain():
    assert domain2(5, MAIL_CONTRACT) == domain(5, MAIL_CONTRACT)
    assert domain2(5, MAIL_CONTRACT).separator() == domain(5, MAIL_CONTRACT).separator()


def test_domain2_rejects_large_chain_id():
    with pytest.raises(ValueError):
        domain2(2**64, MAIL_CONTRACT)


def test_domain_rejects_bad_address_length():
    with pytest.raises(ValueError):
        domain(1, b"\x01" * 19)


def test_domain_rejects_negative_chain_id():
    with pytest.raises(ValueError):
        Eip712Domain(chain_id=-1)


def test_salt_changes_separator():
    salted = Eip712Domain(name="Vertex", salt=b"\x01" * 32)
    plain = Eip712Domain(name="Vertex")
    assert salted.separator() != plain.separator()
    with pytest.raises(ValueError):
        Eip712Domain(salt=b"\x01" * 8)