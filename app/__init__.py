# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'app' folder as the food delivery backend and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package root for the food delivery marketplace API; exposes package metadata.
#
# 🔗 Dependencies:
# - None
#
# 🔄 Connected Modules / Calls From:
# - app.main (application entry point)
# - pyproject.toml (console script)

"""
Food Delivery API

Backend for a three-sided food delivery marketplace: customers order from
restaurants, delivery partners carry the orders, admins moderate.
"""

__version__ = "1.0.0"
__title__ = "Food Delivery API"

__all__ = ["__version__", "__title__"]
