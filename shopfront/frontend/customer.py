from __future__ import annotations

from typing import Optional

from shopfront.app.client import Context
from shopfront.app.models import Account, Address


class CustomerController:
    def __init__(self, context: Context) -> None:
        self._context = context

    def get(self) -> Optional[Account]:
        if not self._context.user_id:
            return None
        return Account.query.get(self._context.user_id)

    def payment_address(self) -> Optional[Address]:
        """First stored address of the logged in customer."""
        if not self._context.user_id:
            return None
        return (
            Address.query.filter_by(account_id=self._context.user_id)
            .order_by(Address.id.asc())
            .first()
        )
