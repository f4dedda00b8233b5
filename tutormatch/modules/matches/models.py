# Supabase table: matches
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

matches:
- id: uuid (primary key)
- student_id: uuid (foreign key to profiles.id, not null)
- tutor_id: uuid (foreign key to profiles.id, not null)
- status: text (not null, default: 'pending') - values: pending, matched, rejected
- created_at: timestamp (default: now())

A match starts as 'pending' when a student swipes right on a tutor.
The tutor accepts ('matched') or declines ('rejected'); only matched
matches get a conversation.
"""
