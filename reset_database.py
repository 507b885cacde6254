#!/usr/bin/env python3
"""Wipe every persisted key (accounts, jobs, session, counters, notifications)."""

import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Check if MongoDB is enabled
ENABLE_MONGODB = os.getenv("ENABLE_MONGODB", "false").lower() == "true"

if not ENABLE_MONGODB:
    print("MongoDB is not enabled. Set ENABLE_MONGODB=true in .env")
    sys.exit(1)

from offerboard.database import close_mongo_connection
from offerboard.marketplace import build_kv_store
from offerboard.settings import Settings


def reset_store():
    """Delete every key in the configured key-value store."""
    store = build_kv_store(Settings.from_env())
    removed = store.clear()
    print(f"Removed {removed} stored keys.")
    close_mongo_connection()


if __name__ == "__main__":
    print("Resetting the OfferBoard store.")
    print("This will DELETE ALL accounts, jobs and notifications.")

    confirm = input("\nAre you sure? Type 'yes' to continue: ")
    if confirm.lower() == 'yes':
        reset_store()
    else:
        print("Reset cancelled.")
