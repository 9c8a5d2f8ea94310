# Supabase table: user_roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_roles:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- role: app_role enum (not null) - values: user, vendor, admin, super_admin
- created_at: timestamp (default: now())

No uniqueness is enforced on user_id. When several rows exist for one user
the most privileged role wins (see Role.rank). set_user_role always leaves
exactly one row behind.
"""
