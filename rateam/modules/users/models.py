# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (nullable) - copied from auth.users at sign-up
- full_name: text (nullable)
- avatar_url: text (nullable) - public URL in the vendor-profiles bucket
- whatsapp: text (nullable)
- phone: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Rows are created by a trigger on auth.users and never deleted by this service.
"""
