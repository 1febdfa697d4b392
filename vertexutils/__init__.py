"""Transaction types, EIP-712 digests, trigger order status and subaccount lookups."""

__version__ = "0.1.0"
__all__ = ["tx", "trigger", "subaccount_info"]