# Supabase table: sessions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

sessions:
- id: uuid (primary key)
- study_plan_id: uuid (foreign key to study_plans.id, not null)
- scheduled_at: timestamp (not null)
- duration_minutes: integer (not null)
- type: text (not null) - values: video, in_person
- location: text (nullable) - required for in_person sessions
- status: text (default: 'scheduled') - values: scheduled, completed, cancelled
- notes: text (nullable)
- created_at: timestamp (default: now())
"""
