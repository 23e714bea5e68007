# 📄 File: app/modules/orders/application/handlers/__init__.py
# 🧭 Purpose (Layman Explanation):
# The workers that carry out order requests and answer order questions.
# 🧪 Purpose (Technical Summary):
# Command, query and event handlers of the orders module.
# 🔗 Dependencies:
# app.modules.orders.application.commands / queries, orders domain
# 🔄 Connected Modules / Calls From:
# orders API, app.main (event subscriptions)
