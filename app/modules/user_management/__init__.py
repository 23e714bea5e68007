# 📄 File: app/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about accounts: signing up, logging in and looking up who you are.
# 🧪 Purpose (Technical Summary):
# User management bounded context: User aggregate with roles, repository, AuthService
# (bcrypt + JWT) and the /api/auth router.
# 🔗 Dependencies:
# app.shared (security, config, database session)
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.api.middleware.authentication, order placement (customer ledger)
