"""
Token Registry

Issuance and ownership bookkeeping for claimed tokens. The issuance gate
depends only on the TokenRegistry protocol; InMemoryTokenRegistry is the
reference implementation used by the service, CLI and tests.

Royalty settings are stored and quoted here. Transfer and approval are not
supported.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Protocol

from core.crypto.identity import is_zero_address, normalize_address
from core.merkle.leaf import validate_token_id
from core.schemas.claims import MAX_ROYALTY_BPS, RoyaltyQuote, RoyaltySettings
from core.schemas.errors import SchemaValidationException, TokenRegistryException


logger = logging.getLogger(__name__)


class TokenRegistry(Protocol):
    """Collaborator that records which address owns which token."""

    @property
    def royalty(self) -> RoyaltySettings: ...

    def issue(self, token_id: int, owner: str) -> None: ...

    def owner_of(self, token_id: int) -> str: ...

    def balance_of(self, owner: str) -> int: ...

    def royalty_info(self, token_id: int, sale_price: int) -> RoyaltyQuote: ...

    def issued(self) -> dict[int, str]: ...

    def revoke(self, token_id: int) -> None: ...


class InMemoryTokenRegistry:
    """
    Process-local token registry.

    Raises:
        TokenRegistryException: On issuing an existing token, issuing to the
            zero address, or reading the owner of an unissued token
    """

    def __init__(self, royalty: RoyaltySettings) -> None:
        recipient = normalize_address(royalty.recipient, "royalty.recipient")
        self._royalty = RoyaltySettings(recipient=recipient, bps=royalty.bps)
        self._owners: dict[int, str] = {}
        self._balances: Counter[str] = Counter()

    @property
    def royalty(self) -> RoyaltySettings:
        return self._royalty

    def issue(self, token_id: int, owner: str) -> None:
        token_id = validate_token_id(token_id)
        owner = normalize_address(owner, "owner")
        if is_zero_address(owner):
            raise TokenRegistryException("Cannot issue to the zero address", token_id)
        if token_id in self._owners:
            raise TokenRegistryException(f"Token {token_id} already issued", token_id)
        self._owners[token_id] = owner
        self._balances[owner] += 1
        logger.debug(f"Issued token {token_id} to {owner}")

    def owner_of(self, token_id: int) -> str:
        token_id = validate_token_id(token_id)
        try:
            return self._owners[token_id]
        except KeyError:
            raise TokenRegistryException(
                f"Token {token_id} has not been issued", token_id
            ) from None

    def balance_of(self, owner: str) -> int:
        return self._balances[normalize_address(owner, "owner")]

    def royalty_info(self, token_id: int, sale_price: int) -> RoyaltyQuote:
        """Royalty owed on a sale: sale_price * bps // 10000."""
        token_id = validate_token_id(token_id)
        if isinstance(sale_price, bool) or not isinstance(sale_price, int) or sale_price < 0:
            raise SchemaValidationException(
                "Sale price must be a non-negative integer", "sale_price"
            )
        return RoyaltyQuote(
            token_id=token_id,
            sale_price=sale_price,
            recipient=self._royalty.recipient,
            amount=sale_price * self._royalty.bps // MAX_ROYALTY_BPS,
        )

    def issued(self) -> dict[int, str]:
        return dict(self._owners)

    def revoke(self, token_id: int) -> None:
        """
        Remove an issued token.

        Only used to undo an issuance whose enclosing change failed; unknown
        token ids are ignored.
        """
        owner = self._owners.pop(validate_token_id(token_id), None)
        if owner is None:
            return
        self._balances[owner] -= 1
        if self._balances[owner] <= 0:
            del self._balances[owner]
        logger.debug(f"Revoked token {token_id} from {owner}")
