"""
Register Use Case

Creates a PENDING account. No session is created by registration.
"""

import logging
from typing import List, Optional

from grimoire.app.errors import email_already_in_use, hashing_error, weak_password
from grimoire.app.repositories.user_repository import DuplicateEmailError
from grimoire.app.services.password_hasher import HashingError, PasswordHasher
from grimoire.app.services.password_policy import PasswordPolicy
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.domain.entities import Role, RoleName, User, UserStatus
from grimoire.libs.result import Result, Return
from .dtos import PublicUserView, RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand
    - Output: Result[RegisterResponse]

    Business Logic:
    1. Normalize email (trim, lowercase)
    2. Validate password against PasswordPolicy (WEAK_PASSWORD)
    3. Check if email already exists (EMAIL_ALREADY_IN_USE)
    4. Hash password with Argon2id
    5. Create User with status=PENDING and the USER role
    6. Commit; a unique-constraint race also yields EMAIL_ALREADY_IN_USE
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: Optional[PasswordHasher] = None,
        policy: Optional[PasswordPolicy] = None,
    ):
        self.uow = uow
        self.hasher = hasher or PasswordHasher()
        self.policy = policy or PasswordPolicy()

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        email = User.normalize_email(command.email)

        validation = self.policy.validate(command.password)
        if not validation.valid:
            return Return.err(weak_password(validation.reason))

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(email_already_in_use())

            try:
                password_hash = self.hasher.hash(command.password)
            except HashingError:
                logger.exception("Password hashing failed during registration")
                return Return.err(hashing_error())

            user = User(
                email=email,
                password_hash=password_hash,
                display_name=command.display_name.strip(),
                status=UserStatus.PENDING,
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                # Lost the race against a concurrent registration
                return Return.err(email_already_in_use())

            roles = await self._assign_default_role(user)
            response = RegisterResponse(user=PublicUserView.from_user(user, roles))

            await self.uow.commit()

            logger.info(f"User registered: {response.user.id}")
            return Return.ok(response)

    async def _assign_default_role(self, user: User) -> List[str]:
        role = await self.uow.roles.get_by_name(RoleName.USER.value)
        if role is None:
            role = await self.uow.roles.create(
                Role(name=RoleName.USER.value, description="Regular user")
            )
        await self.uow.roles.assign(user.id, role.id)
        return [role.name]
