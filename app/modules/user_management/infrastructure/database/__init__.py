# 📄 File: app/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Where user accounts are stored in the database.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy UserModel and the UserRepositoryImpl bound to the UserRepository interface.
# 🔗 Dependencies:
# SQLAlchemy async ORM, app.shared.infrastructure.database.session
# 🔄 Connected Modules / Calls From:
# app.main (dependency overrides), app.shared.config.database (metadata registration)
