# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic and database access for a single entity:
#
#   post_service      — CRUD for Post, with connect/set of its categories
#   user_service      — CRUD + upsert-by-email for User
#   category_service  — upsert-by-name and listing for Category
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
