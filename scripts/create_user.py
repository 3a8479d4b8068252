"""Create a helpdesk user in the configured database.

Usage:
  python scripts/create_user.py --email ana@example.com --password '...' --tipo tecnico

Reads DATABASE_URL like the app does; tables are created if missing.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from fastapi import HTTPException

from helpdesk import schemas
from helpdesk.database import SessionLocal, init_db
from helpdesk.users import create_user


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--nome")
    ap.add_argument("--tipo", dest="tipo_utilizador", help="user type, e.g. cliente or tecnico")
    ap.add_argument("--empresa")
    ap.add_argument("--funcao")
    args = ap.parse_args()

    init_db()

    user_in = schemas.UtilizadorCreate(
        email=args.email,
        senha=args.password,
        nome=args.nome,
        tipo_utilizador=args.tipo_utilizador,
        empresa=args.empresa,
        funcao=args.funcao,
    )

    db = SessionLocal()
    try:
        user = create_user(db, user_in)
    except HTTPException as exc:
        sys.exit(f"Could not create user: {exc.detail['message']}")
    finally:
        db.close()

    print("Created user:")
    print(schemas.UtilizadorResponse.model_validate(user).model_dump_json(by_alias=True, indent=2))


if __name__ == "__main__":
    main()
