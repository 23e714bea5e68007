# 📄 File: app/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# What we know about a person using the app and which kind of user they are.
# 🧪 Purpose (Technical Summary):
# Domain model package for the User entity and its role/status enums.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# AuthService, UserRepository, auth schemas

from .user import User, UserRole, UserStatus

__all__ = ["User", "UserRole", "UserStatus"]
