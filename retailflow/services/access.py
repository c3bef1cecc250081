"""
Access — staff login, the active session and role checks.

Credentials are checked by django.contrib.auth. The role and the assigned
store always come from StaffProfile; the HTTP session stores only the
user id.
"""

import logging
from dataclasses import dataclass

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction

from retailflow.exceptions import AccessError
from retailflow.models.enums import UserRole
from retailflow.models.staff import StaffProfile

logger = logging.getLogger('retailflow')

SESSION_KEY = '_retailflow_user_id'


@dataclass(frozen=True)
class ActiveSession:
    """Who is acting, with which role, for which store."""

    user_id: int
    username: str
    name: str
    role: str
    store_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def store_scope(self) -> int | None:
        """Store id this session is restricted to. None means every store."""
        return None if self.is_admin else self.store_id

    @classmethod
    def for_user(cls, user) -> 'ActiveSession':
        profile = StaffProfile.objects.filter(user=user).first()
        if profile is not None:
            role = profile.role
            store_id = profile.assigned_store_id
        else:
            role = UserRole.ADMIN if user.is_superuser else UserRole.STORE_MANAGER
            store_id = None
        return cls(
            user_id=user.pk,
            username=user.get_username(),
            name=user.get_full_name() or user.get_username(),
            role=role,
            store_id=store_id,
        )


class Access:
    """Login lifecycle and staff directory."""

    @classmethod
    def login(cls, username: str, password: str) -> ActiveSession:
        """
        Raises:
            AccessError('INACTIVE_USER'): Right password, disabled account
            AccessError('INVALID_CREDENTIALS'): Anything else
        """
        user = authenticate(username=username, password=password)
        if user is None:
            User = get_user_model()
            candidate = User._default_manager.filter(**{User.USERNAME_FIELD: username}).first()
            if candidate is not None and not candidate.is_active and candidate.check_password(password):
                logger.warning("access.login.inactive", extra={"username": username})
                raise AccessError('INACTIVE_USER', username=username)
            logger.warning("access.login.failed", extra={"username": username})
            raise AccessError('INVALID_CREDENTIALS', username=username)

        session = ActiveSession.for_user(user)
        logger.info(
            "access.login",
            extra={"user_id": user.pk, "role": session.role, "store_id": session.store_id},
        )
        return session

    @classmethod
    def save_session(cls, http_session, session: ActiveSession) -> None:
        http_session[SESSION_KEY] = session.user_id

    @classmethod
    def load_session(cls, http_session) -> ActiveSession | None:
        """
        Rebuild the active session from the HTTP session.

        Returns None when nobody is logged in or the user is gone or disabled.
        """
        user_id = http_session.get(SESSION_KEY)
        if user_id is None:
            return None
        user = get_user_model()._default_manager.filter(pk=user_id, is_active=True).first()
        if user is None:
            http_session.pop(SESSION_KEY, None)
            return None
        return ActiveSession.for_user(user)

    @classmethod
    def logout(cls, http_session) -> None:
        user_id = http_session.pop(SESSION_KEY, None)
        if user_id is not None:
            logger.info("access.logout", extra={"user_id": user_id})

    # ══════════════════════════════════════════════════════════════
    # ROLE CHECKS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def require_session(cls, session: ActiveSession | None) -> ActiveSession:
        if session is None:
            raise AccessError('NO_SESSION')
        return session

    @classmethod
    def require_admin(cls, session: ActiveSession | None) -> ActiveSession:
        """
        Raises:
            AccessError('NO_SESSION')
            AccessError('PERMISSION_DENIED'): Not an admin
        """
        session = cls.require_session(session)
        if not session.is_admin:
            raise AccessError('PERMISSION_DENIED', user_id=session.user_id, required=UserRole.ADMIN)
        return session

    @classmethod
    def require_store_access(cls, session: ActiveSession | None, store) -> ActiveSession:
        """Admins reach every store; managers only their assigned one."""
        session = cls.require_session(session)
        if session.is_admin:
            return session
        if session.store_id is None or session.store_id != store.pk:
            raise AccessError('PERMISSION_DENIED', user_id=session.user_id, store_id=store.pk)
        return session

    # ══════════════════════════════════════════════════════════════
    # STAFF DIRECTORY
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create_staff(cls, username: str, password: str, role: str = UserRole.STORE_MANAGER,
                     name: str = '', store=None) -> StaffProfile:
        """Create an auth user with its profile. A manager with a store takes it over."""
        User = get_user_model()
        with transaction.atomic():
            user = User.objects.create_user(username=username, password=password)
            if name:
                user.first_name = name
                user.save(update_fields=['first_name'])
            profile = StaffProfile.objects.create(user=user, role=role)
            if store is not None:
                profile = cls.assign_manager(user, store)

        logger.info(
            "access.staff.created",
            extra={"user_id": user.pk, "role": role, "store_id": getattr(store, 'pk', None)},
        )
        return profile

    @classmethod
    def assign_manager(cls, user, store) -> StaffProfile:
        """
        Make user the manager of store. Any other manager of that store
        is unassigned first, so a store has at most one.
        """
        with transaction.atomic():
            StaffProfile.objects.filter(
                assigned_store=store,
                role=UserRole.STORE_MANAGER,
            ).exclude(user=user).update(assigned_store=None)

            profile, _ = StaffProfile.objects.select_for_update().get_or_create(user=user)
            profile.assigned_store = store
            profile.save(update_fields=['assigned_store'])

        logger.info(
            "access.manager.assigned",
            extra={"user_id": user.pk, "store_id": store.pk},
        )
        return profile
