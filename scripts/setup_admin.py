import sys
import os
import argparse

# Add the project root directory to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from versoforms.services.admin_setup import ensure_admin
from versoforms.services.backend import BackendClient, BackendError
from versoforms.services.database import build_engine, create_db_and_tables
from versoforms.services.storage import S3Storage

def main() -> int:
    parser = argparse.ArgumentParser(description="Create an admin account or grant the admin role to an existing one.")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args()

    engine = build_engine()
    create_db_and_tables(engine)
    backend = BackendClient(engine, S3Storage())

    try:
        result = ensure_admin(backend, args.email, args.password)
    except BackendError as e:
        print(f"Admin setup failed: {e.message}", file=sys.stderr)
        return 1

    if result.created:
        print(f"Admin user created successfully: {result.user_id}")
    else:
        print(f"Admin role ensured for existing user {result.user_id}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
