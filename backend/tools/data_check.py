import json
import os
import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
DATA_DIR = sys.argv[2] if len(sys.argv) > 2 else "data"

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Users ===")
cur.execute("SELECT id, email, roles, created_at FROM users ORDER BY id LIMIT 50")
for r in cur.fetchall():
    roles = r[2]
    try:
        roles = json.loads(roles) if isinstance(roles, str) else roles
    except ValueError:
        pass
    print({"id": r[0], "email": r[1], "roles": roles, "created_at": r[3]})
conn.close()

for name in ("products.json", "cart.json", "documents.json"):
    path = os.path.join(DATA_DIR, name)
    print(f"\n=== {name} ===")
    if not os.path.exists(path):
        print("(missing)")
        continue
    try:
        with open(path, "r", encoding="utf-8") as fh:
            rows = json.load(fh)
    except ValueError as e:
        print("(malformed)", e)
        continue
    for row in rows[:20] if isinstance(rows, list) else [rows]:
        print(row)
