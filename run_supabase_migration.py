#!/usr/bin/env python3
"""Check that the document and investor tables exist in Supabase."""
import sys
from pathlib import Path

from app.db.supabase_client import get_supabase, is_missing_relation_error
from app.db.versioned_documents import DOCUMENT_CLASSES

MIGRATION_FILE = Path(__file__).parent / "migrations" / "0001_investor_hub.sql"

ACTIVITY_TABLES = ["investor_sessions", "investor_agreements"]


def required_tables() -> list[str]:
    tables = []
    for document in DOCUMENT_CLASSES.values():
        tables.extend([document.table, document.history_table])
    return tables + ACTIVITY_TABLES


def run_migration():
    supabase = get_supabase()
    missing = []

    print("🔍 Checking Supabase tables...")
    for table in required_tables():
        try:
            supabase.table(table).select("id").limit(1).execute()
            print(f"✅ {table}")
        except Exception as e:
            if not is_missing_relation_error(e):
                print(f"❌ {table}: {e}")
                sys.exit(1)
            print(f"⚠️  {table} is missing")
            missing.append(table)

    if missing:
        print("💡 Run this SQL in your Supabase SQL editor:")
        print(MIGRATION_FILE.read_text())
        sys.exit(1)

    print("✅ Schema is up to date!")


if __name__ == "__main__":
    run_migration()
