"""
Query facade: the single place where the caller's role scopes share access.

Views build a Principal from request.user and call ShareQueryFacade; the
facade checks the role, delegates to the ledger writer or the aggregation
engine, and adds the response-level fields (counts, month labels).
"""

from dataclasses import dataclass
from typing import Any, Optional
import uuid

from apps.accounts.models import Role
from ..exceptions import ShareAccessForbiddenError
from ..periods import month_key
from .aggregation import ShareAggregation
from .ledger_writer import record_purchase
from .store import get_member, parse_user_id


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as seen by the share core."""

    id: uuid.UUID
    role: str

    @classmethod
    def from_user(cls, user) -> 'Principal':
        return cls(id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class ShareQueryFacade:
    """Role-checked entry points for share reads and writes."""

    def __init__(self, principal: Principal):
        self.principal = principal

    def _require_admin(self):
        if not self.principal.is_admin:
            raise ShareAccessForbiddenError('Only admins can perform this action.')

    def _resolve_member(self, user_id) -> tuple[uuid.UUID, Optional[Any]]:
        """
        Decide whose shares the caller may read.

        Members may only read their own; `None` means self. Admins own no
        shares, so they must name a member and get MemberNotFoundError for
        anyone else.
        """
        if user_id is None:
            if self.principal.role != Role.MEMBER:
                raise ShareAccessForbiddenError('Only members have their own shares.')
            return self.principal.id, None

        if not self.principal.is_admin:
            if parse_user_id(user_id) != self.principal.id:
                raise ShareAccessForbiddenError('Members can only view their own shares.')
            return self.principal.id, None

        member = get_member(user_id)
        return member.id, member

    # =========================================================================
    # Member-scoped reads
    # =========================================================================

    def member_shares(self, user_id=None) -> dict:
        target_id, member = self._resolve_member(user_id)
        result = ShareAggregation.member_shares(target_id)
        return {
            'member_id': target_id,
            'member_name': member.name if member else None,
            'total_shares': result['total_shares'],
            'count': len(result['purchases']),
            'purchases': result['purchases'],
        }

    def member_monthly_shares(self, user_id=None) -> list:
        target_id, _ = self._resolve_member(user_id)
        return ShareAggregation.member_monthly_shares(target_id)

    # =========================================================================
    # Admin operations
    # =========================================================================

    def record_purchase(self, **fields):
        self._require_admin()
        fields['recorded_by'] = self.principal.id
        return record_purchase(**fields)

    def all_purchases(self, limit: Optional[int] = None) -> list:
        self._require_admin()
        return ShareAggregation.all_purchases(limit=limit)

    def global_stats(self) -> dict:
        self._require_admin()
        return ShareAggregation.global_stats()

    def month_statistics(self, month, year) -> dict:
        self._require_admin()
        key = month_key(month, year)
        return {
            'month': int(month),
            'year': int(year),
            'month_string': key,
            **ShareAggregation.month_statistics(key),
        }

    def available_months(self) -> list:
        self._require_admin()
        return ShareAggregation.available_months()
