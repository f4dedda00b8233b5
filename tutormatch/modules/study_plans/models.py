# Supabase table: study_plans
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

study_plans:
- id: uuid (primary key)
- student_id: uuid (foreign key to profiles.id, not null)
- tutor_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- subject: text (not null)
- description: text (nullable)
- goals: jsonb (default: '[]') - list of {title, completed}
- progress: integer (default: 0) - 0..100
- status: text (default: 'active') - values: active, completed, paused
- due_date: date (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
