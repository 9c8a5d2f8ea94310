# Supabase tables: polls, poll_votes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

polls:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- options: jsonb (not null) - ordered list of option labels, at least 2, fixed once created
- status: poll_status enum (not null, default: 'active') - values: requested, active
- ends_at: timestamp (nullable) - voting closes after this instant
- created_by: uuid (foreign key to auth.users.id, nullable)
- created_at: timestamp (default: now())

poll_votes:
- id: uuid (primary key)
- poll_id: uuid (foreign key to polls.id, on delete cascade, not null)
- user_id: uuid (foreign key to auth.users.id, not null)
- option_index: integer (not null) - index into polls.options
- created_at: timestamp (default: now())
- unique constraint on (poll_id, user_id) - one ballot per user, target of the vote upsert
"""
