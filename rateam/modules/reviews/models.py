# Supabase table: reviews
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

reviews:
- id: uuid (primary key)
- vendor_id: uuid (foreign key to vendors.id, not null)
- user_id: uuid (foreign key to profiles.id, not null) - reviewer
- rating: integer (not null, check 1..5)
- comment: text (nullable)
- status: review_status enum (not null, default: 'pending') - values: pending, approved, rejected
- customer_contact_visible: boolean (not null, default: false) - reviewer allows the vendor to contact them
- vendor_reply: text (nullable)
- vendor_reply_at: timestamp (nullable)
- created_at: timestamp (default: now())

A trigger keeps vendors.rating and vendors.review_count in sync with approved reviews.
"""
