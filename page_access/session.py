"""
Per-identity permission session.

Holds the resolved UserPermissions for the current identity and answers
capability queries synchronously. State changes replace one immutable snapshot
under a lock, so a reader never sees an old role mixed with new overrides.
"""
from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .capabilities import ActionDecision, CapabilitySet, check_action, derive_capabilities
from .legacy import legacy_can_edit_page
from .logging_config import create_logger
from .permissions import PageLike, PageName, PermissionLevel, UserPermissions, get_accessible_pages, resolve_level
from .resolver import IdentityResolver

logger = create_logger("services.session")


class SessionState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SIGNED_OUT = "signed_out"


@dataclass(frozen=True)
class _Snapshot:
    state: SessionState
    user_id: Optional[str] = None
    user: Optional[UserPermissions] = None
    generation: int = 0


class PermissionSession:
    def __init__(self, resolver: IdentityResolver, executor: Optional[ThreadPoolExecutor] = None):
        self.resolver = resolver
        self._executor = executor
        self._owns_executor = executor is None
        self._lock = threading.RLock()
        self._ready = threading.Event()
        # No identity event seen yet: report loading, not denied
        self._snapshot = _Snapshot(state=SessionState.LOADING)

    # ========= STATE =========
    @property
    def state(self) -> SessionState:
        return self._snapshot.state

    @property
    def loading(self) -> bool:
        return self._snapshot.state is SessionState.LOADING

    @property
    def user_id(self) -> Optional[str]:
        return self._snapshot.user_id

    @property
    def user_permissions(self) -> Optional[UserPermissions]:
        snap = self._snapshot
        return snap.user if snap.state is SessionState.READY else None

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

    # ========= IDENTITY EVENTS =========
    def on_identity_change(self, user_id: Optional[str], wait: bool = True) -> Optional[Future]:
        """
        React to the identity provider: a user id means signed in, None means signed out.

        With `wait=False` the store round-trip runs on the session's executor and
        the returned future completes once the snapshot is swapped in.
        """
        if not user_id:
            self.sign_out()
            return None

        with self._lock:
            generation = self._snapshot.generation + 1
            self._snapshot = _Snapshot(state=SessionState.LOADING, user_id=user_id, generation=generation)
            self._ready.clear()

        if wait:
            self._load(user_id, generation)
            return None
        return self._get_executor().submit(self._load, user_id, generation)

    def refresh(self, wait: bool = True) -> Optional[Future]:
        """Drop the cached role for the current identity and resolve it again."""
        user_id = self._snapshot.user_id
        if not user_id:
            return None
        self.resolver.clear_user_role_cache(user_id)
        return self.on_identity_change(user_id, wait=wait)

    def sign_out(self) -> None:
        with self._lock:
            self._snapshot = _Snapshot(state=SessionState.SIGNED_OUT, generation=self._snapshot.generation + 1)
            self._ready.set()
        logger.info("Session signed out")

    def _load(self, user_id: str, generation: int) -> None:
        try:
            user = self.resolver.resolve(user_id)
        except Exception:
            logger.exception(f"Error loading permissions for {user_id}")
            user = None

        with self._lock:
            if self._snapshot.generation != generation:
                logger.info(f"Discarding stale permissions for {user_id}")
                return
            self._snapshot = _Snapshot(state=SessionState.READY, user_id=user_id, user=user, generation=generation)
            self._ready.set()
        logger.info(f"Permissions ready for {user_id}: role={user.role.value if user else None}")

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="permission-session")
            return self._executor

    def close(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ========= QUERIES =========
    def get_level(self, page: PageLike) -> PermissionLevel:
        return resolve_level(self.user_permissions, page)

    def capabilities(self, page: PageLike) -> CapabilitySet:
        return derive_capabilities(self.get_level(page))

    def can_access(self, page: PageLike) -> bool:
        return self.capabilities(page).can_access

    def can_view(self, page: PageLike) -> bool:
        return self.capabilities(page).can_view

    def can_manage(self, page: PageLike) -> bool:
        return self.capabilities(page).can_manage

    def can_submit(self, page: PageLike) -> bool:
        return self.capabilities(page).can_submit

    def is_partial_access(self, page: PageLike) -> bool:
        return self.capabilities(page).is_partial_access

    def can_edit_or_delete(self, page: PageLike) -> bool:
        return self.capabilities(page).can_edit_or_delete

    def can_approve_or_manage_others(self, page: PageLike) -> bool:
        return self.capabilities(page).can_approve_or_manage_others

    def check_action(self, page: PageLike, action: str, is_own_data: bool = False) -> ActionDecision:
        return check_action(self.get_level(page), action, is_own_data=is_own_data)

    def accessible_pages(self) -> List[PageName]:
        return get_accessible_pages(self.user_permissions)

    def legacy_can_edit(self, page: PageLike) -> bool:
        """Pre-migration edit check. Denied until the session is ready."""
        user = self.user_permissions
        if user is None:
            return False
        return legacy_can_edit_page(page, user.raw_role)

    def page_summary(self, page: PageLike) -> Dict[str, Any]:
        level = self.get_level(page)
        name = PageName.parse(page)
        return {
            "page": name.value if name else str(page),
            "level": level.value,
            "capabilities": derive_capabilities(level).to_dict(),
        }
