# Supabase tables: conversations, messages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

conversations:
- id: uuid (primary key)
- match_id: uuid (foreign key to matches.id, not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now()) - bumped on every new message

messages:
- id: uuid (primary key)
- conversation_id: uuid (foreign key to conversations.id, not null)
- sender_id: uuid (foreign key to profiles.id, not null)
- content: text (not null)
- created_at: timestamp (default: now())
"""
