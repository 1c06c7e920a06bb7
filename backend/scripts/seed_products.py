#!/usr/bin/env python3
"""
Seed the products JSON store from a source file and make sure an admin
account exists.

Entries are normalized (``name``/``title``, ``price``/``amount``), run through
``validate_product`` and given fresh ids; invalid entries are skipped.

Usage:
    python scripts/seed_products.py --file ./seed/catalogue.json \
        --admin-email admin@example.com --admin-password 'Secret123'
"""
import argparse
import json
import logging
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.api.deps import PRODUCTS_FILE, get_token_service
from app.config import settings
from app.db import SessionLocal, init_db
from app.repositories.json_store import JsonFileStore
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository
from app.schemas.product_schema import ProductIn
from app.services.auth_service import AuthService
from app.services.cart_pricing import validate_product
from app.services.product_service import ProductService
from app.utils.log_config import configure_logging

log = logging.getLogger("app.scripts.seed_products")

DEFAULT_SOURCE = os.path.join(os.path.dirname(__file__), "..", "seed", "catalogue.json")

# Used when no source file is given, so a fresh checkout has something to browse.
DEFAULT_PRODUCTS = [
    {"name": "Test Product", "price": 19.99},
    {"name": "Another Product", "price": 99.95},
    {"name": "Budget Item", "price": 1.00},
    {"name": "Premium Product", "price": 999.99},
]


def _normalize_entry(entry):
    """Return a dict with ``name`` and ``price`` keys from a loosely shaped entry."""
    if not isinstance(entry, dict):
        return None
    return {
        "name": entry.get("name") or entry.get("title"),
        "price": entry.get("price", entry.get("amount")),
    }


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")

    if isinstance(data, dict):
        # an object with an items list, or a mapping of entries
        if isinstance(data.get("items"), list):
            return data["items"]
        return list(data.values())
    if isinstance(data, list):
        return data
    return []


def seed_products(entries, replace: bool = False) -> int:
    repo = ProductRepository(JsonFileStore(os.path.join(settings.DATA_DIR, PRODUCTS_FILE)))
    svc = ProductService(repo)
    if replace:
        svc.clear_products()

    created = 0
    for raw in entries:
        entry = _normalize_entry(raw)
        errors = validate_product(entry)
        if errors:
            log.warning("Skipping product entry=%s errors=%s", raw, errors)
            continue
        svc.create_product(ProductIn.from_payload(entry))
        created += 1
    return created


def ensure_admin(email: str, password: str) -> bool:
    init_db()
    db = SessionLocal()
    try:
        if UserRepository(db).get_by_email(email):
            return False
        AuthService(db, get_token_service(), settings.BCRYPT_ROUNDS).create_user(
            email, password, ["user", "admin"]
        )
        return True
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a product json list")
    parser.add_argument("--replace", action="store_true", help="Clear the catalog first")
    parser.add_argument("--admin-email", default=None)
    parser.add_argument("--admin-password", default=None)
    args = parser.parse_args()

    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            sys.exit(1)
        entries = load_entries(args.file)
    elif os.path.exists(DEFAULT_SOURCE):
        entries = load_entries(DEFAULT_SOURCE)
    else:
        entries = DEFAULT_PRODUCTS

    print("Seeded products:", seed_products(entries, replace=args.replace))

    if args.admin_email and args.admin_password:
        created = ensure_admin(args.admin_email.strip().lower(), args.admin_password)
        print("Admin account", "created" if created else "already exists", args.admin_email)
