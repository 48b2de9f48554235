"""Custom exceptions for the P2P Swap program module.

Every exception carries a ``kind`` tag from :class:`ErrorKind`, so callers
that prefer matching on a closed set of variants can do so without
``isinstance`` chains.
"""

from enum import Enum
from typing import Sequence


class ErrorKind(str, Enum):
    """Closed set of failure reasons raised by the SDK."""

    GENERIC = "generic"
    DECODE = "decode"
    SIZE_MISMATCH = "size_mismatch"
    INVALID_ACCOUNT_DATA = "invalid_account_data"
    ACCOUNT_NOT_FOUND = "account_not_found"
    VALIDATION = "validation"
    SELLER_MISMATCH = "seller_mismatch"
    ADDRESS_MISMATCH = "address_mismatch"
    WALLET_MISMATCH = "wallet_mismatch"
    MISSING_TOKEN_INFO = "missing_token_info"
    DOMAIN = "domain"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_UNLOCK_KEY = "invalid_unlock_key"
    MISSING_UNLOCK_KEY = "missing_unlock_key"
    DERIVATION = "derivation"
    ORDER_ADDRESS_IN_USE = "order_address_in_use"


class P2PSwapError(Exception):
    """Base exception for all P2P Swap SDK errors."""

    kind = ErrorKind.GENERIC


# ============================================================================
# DECODING
# ============================================================================


class DecodeError(P2PSwapError):
    """Raised when account bytes cannot be decoded."""

    kind = ErrorKind.DECODE


class SizeMismatchError(DecodeError):
    """Raised when account data does not have the exact expected size."""

    kind = ErrorKind.SIZE_MISMATCH

    def __init__(self, actual: int, expected: Sequence[int]):
        self.actual = actual
        self.expected = tuple(expected)
        expected_str = " or ".join(str(size) for size in self.expected)
        super().__init__(
            f"Account is not p2p order: {actual} bytes (expected {expected_str})"
        )


class InvalidAccountDataError(DecodeError):
    """Raised when account data cannot be (de)serialized."""

    kind = ErrorKind.INVALID_ACCOUNT_DATA

    def __init__(self, message: str):
        super().__init__(f"Invalid account data: {message}")


class AccountNotFoundError(P2PSwapError):
    """Raised when an account is not found on-chain."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND

    def __init__(self, address: str, what: str = "Account"):
        self.address = address
        super().__init__(f"{what} not found: {address}")


# ============================================================================
# VALIDATION
# ============================================================================


class ValidationError(P2PSwapError):
    """Raised when a decoded order is not consistent with its derived addresses.

    A record that fails validation must not be trusted.
    """

    kind = ErrorKind.VALIDATION


class SellerMismatchError(ValidationError):
    """Raised when the order seller is not the expected one."""

    kind = ErrorKind.SELLER_MISMATCH

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Seller not match: expected {expected}, got {actual}")


class AddressMismatchError(ValidationError):
    """Raised when the order address does not match the derived one."""

    kind = ErrorKind.ADDRESS_MISMATCH

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Order address not match. Expected: {expected}")


class WalletMismatchError(ValidationError):
    """Raised when the order wallet does not match the derived one."""

    kind = ErrorKind.WALLET_MISMATCH

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Order wallet not match: expected {expected}, got {actual}")


class MissingTokenInfoError(ValidationError):
    """Raised when the sell token mint of an order is unknown."""

    kind = ErrorKind.MISSING_TOKEN_INFO

    def __init__(self, field: str = "sellToken"):
        self.field = field
        super().__init__(f"{field} not set")


# ============================================================================
# REQUEST DOMAIN
# ============================================================================


class DomainError(P2PSwapError):
    """Raised when a create/fill request is outside the protocol domain."""

    kind = ErrorKind.DOMAIN


class InvalidAmountError(DomainError):
    """Raised when an amount is zero, negative or out of range."""

    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}: {value} ({reason})")


class InvalidUnlockKeyError(DomainError):
    """Raised when a supplied unlock key is not a 64-byte signature."""

    kind = ErrorKind.INVALID_UNLOCK_KEY

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Unlock key must be 64 bytes, got {length}")


class MissingUnlockKeyError(P2PSwapError):
    """Raised when a private order is filled without an unlock key."""

    kind = ErrorKind.MISSING_UNLOCK_KEY

    def __init__(self, order_address: str):
        self.order_address = order_address
        super().__init__(
            f"Unlock key is not specified for private order {order_address}"
        )


class DerivationError(P2PSwapError):
    """Raised when a program address cannot be derived from its seeds.

    Not retryable: the same seeds always fail the same way.
    """

    kind = ErrorKind.DERIVATION

    def __init__(self, message: str):
        super().__init__(f"Address derivation failed: {message}")


class OrderAddressInUseError(P2PSwapError):
    """Raised when the order address for the current slot is already taken."""

    kind = ErrorKind.ORDER_ADDRESS_IN_USE

    def __init__(self, address: str, slot: int):
        self.address = address
        self.slot = slot
        super().__init__(
            f"Unable to generate new order address: {address} (slot {slot}) exists"
        )
