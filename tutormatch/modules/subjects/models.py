# Supabase tables: subjects, tutor_subjects
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

subjects:
- id: uuid (primary key)
- name: text (not null)
- category: text (not null)
- created_at: timestamp (default: now())

tutor_subjects:
- id: uuid (primary key)
- tutor_id: uuid (foreign key to profiles.id, not null)
- subject_id: uuid (foreign key to subjects.id, not null)
- proficiency_level: text (not null) - values: beginner, intermediate, advanced, expert
- created_at: timestamp (default: now())
"""
