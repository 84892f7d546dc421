"""
Station Reports - User Repository
Account access for the first-run setup wizard.
"""

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from ...models.orm_user import User, Role, RolePermission

SUPER_ADMINISTRATOR_ROLE = 'Super Administrator'
ADMINISTER_ALL = 'administer all'


class UserRepository:
    """Repository for users and their roles."""

    def __init__(self, session: Session):
        self.session = session

    def count(self) -> int:
        return self.session.scalar(select(func.count(User.uid))) or 0

    def create_super_administrator(self, email: str, password: str, role_name: str = SUPER_ADMINISTRATOR_ROLE) -> User:
        """
        Create a role holding every permission and a user in that role.

        Args:
            email: Login name of the new user
            password: Plain-text password (stored hashed)
            role_name: Display name of the role

        Returns:
            The persisted User
        """
        role = Role(name=role_name)
        role.permissions.append(RolePermission(action_name=ADMINISTER_ALL))
        self.session.add(role)

        user = User(email=email)
        user.set_password(password)
        user.roles.append(role)
        self.session.add(user)

        self.session.flush()
        return user
