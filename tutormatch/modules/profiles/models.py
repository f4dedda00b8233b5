# Supabase table: profiles (subjects and tutor_subjects: see modules/subjects/models.py)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, same as auth.users.id)
- email: text (not null)
- first_name: text (not null)
- last_name: text (not null)
- role: text (not null) - values: student, tutor
- university: text (nullable)
- major: text (nullable)
- bio: text (nullable)
- avatar_url: text (nullable)
- rating: numeric (nullable)
- hourly_rate: numeric (nullable)
- verified: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
