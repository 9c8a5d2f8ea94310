# Supabase tables: vendors, categories
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

categories:
- id: uuid (primary key)
- name: text (not null, unique)
- icon: text (nullable)
- created_at: timestamp (default: now())

vendors:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - owning account, one vendor per user
- business_name: text (not null)
- category: text (nullable) - category name, also joined as categories(name, icon)
- description: text (nullable)
- location: text (nullable)
- phone: text (nullable)
- whatsapp: text (nullable)
- email: text (nullable)
- preferred_contact: text (nullable) - values: whatsapp, phone, email
- image_url: text (nullable) - cover image
- gallery: jsonb (nullable) - list of public image URLs, at most max_vendor_images
- rating: numeric (nullable) - aggregate, maintained by a review trigger
- review_count: integer (nullable) - aggregate, maintained by a review trigger
- status: vendor_status enum (not null, default: 'pending') - values: pending, approved, suspended, rejected
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Only admins change status. Public reads are limited to approved vendors.
"""
