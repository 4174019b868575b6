# =============================================================================
# core/services/user_service.py - Users & Judges
# =============================================================================
# Registration and password login for contest participants, plus the admin
# management of judge accounts (users with role=judge).
# =============================================================================

import logging
from typing import Any

from app.exceptions import AuthenticationError, JudgeNotFoundError, UsernameTakenError
from core.models.user import JudgeUpdate, UserCreate, UserRole
from lib.patch import build_patch
from lib.security import hash_password, verify_password
from lib.supabase_client import SupabaseClient
from lib.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
EVENT_JUDGES_TABLE = "event_judges"


def _public(row: dict[str, Any]) -> dict[str, Any]:
    """Drop secrets before a user row leaves the service."""
    return {k: v for k, v in row.items() if k != "password_hash"}


class UserService:
    """Service for user accounts."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    def create_user(self, data: UserCreate, role: UserRole = UserRole.USER) -> dict[str, Any]:
        """
        Create an account with a bcrypt-hashed password.

        Raises:
            UsernameTakenError: If the username exists
        """
        username = data.username.lower()
        if self.db.fetch_one(USERS_TABLE, username=username):
            raise UsernameTakenError(username)

        row = {
            "id": new_id(),
            "username": username,
            "password_hash": hash_password(data.password),
            "full_name": data.full_name,
            "phone": data.phone,
            "role": role.value,
            "created_at": utc_now_iso(),
        }

        response = self.db.table(USERS_TABLE).insert(row).execute()
        created = response.data[0] if response.data else row

        logger.info(f"Created {role.value} account: {username}")
        return _public(created)

    def authenticate(self, username: str, password: str) -> dict[str, Any]:
        """
        Verify a username/password pair.

        Returns:
            The user row without the hash

        Raises:
            AuthenticationError: If the credentials don't match
        """
        user = self.db.fetch_one(USERS_TABLE, username=username.strip().lower())
        if not user or not verify_password(password, user.get("password_hash")):
            logger.warning(f"Failed login for username: {username}")
            raise AuthenticationError("Invalid username or password")
        return _public(user)

    def get_user(self, user_id: str) -> dict[str, Any] | None:
        user = self.db.fetch_one(USERS_TABLE, id=user_id)
        return _public(user) if user else None

    # -------------------------------------------------------------------------
    # Judges
    # -------------------------------------------------------------------------

    def list_judges(self) -> list[dict[str, Any]]:
        response = (
            self.db.table(USERS_TABLE)
            .select("*")
            .eq("role", UserRole.JUDGE.value)
            .order("created_at", desc=True)
            .execute()
        )
        return [_public(r) for r in response.data or []]

    def get_judge(self, judge_id: str) -> dict[str, Any]:
        """
        Raises:
            JudgeNotFoundError: If no judge has this ID
        """
        judge = self.db.fetch_one(USERS_TABLE, id=judge_id, role=UserRole.JUDGE.value)
        if not judge:
            raise JudgeNotFoundError(judge_id)
        return _public(judge)

    def create_judge(self, data: UserCreate) -> dict[str, Any]:
        return self.create_user(data, role=UserRole.JUDGE)

    def update_judge(self, judge_id: str, update: JudgeUpdate) -> dict[str, Any]:
        """Partially update a judge; a new password is re-hashed."""
        judge = self.get_judge(judge_id)

        patch = build_patch(update, exclude={"password"})
        if update.password:
            patch["password_hash"] = hash_password(update.password)
        if not patch:
            return judge

        response = (
            self.db.table(USERS_TABLE)
            .update(patch)
            .eq("id", judge_id)
            .execute()
        )
        logger.info(f"Updated judge {judge_id}")
        return _public(response.data[0]) if response.data else {**judge, **_public(patch)}

    def delete_judge(self, judge_id: str) -> None:
        """Delete a judge and their event assignments."""
        self.get_judge(judge_id)

        self.db.table(EVENT_JUDGES_TABLE).delete().eq("judge_id", judge_id).execute()
        self.db.table(USERS_TABLE).delete().eq("id", judge_id).execute()
        logger.info(f"Deleted judge {judge_id}")
