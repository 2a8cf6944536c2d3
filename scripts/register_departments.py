"""Utility script to register the departments of a workspace."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.departments import register_department
from app.domain.exceptions import ValidationError
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for department registration."""

    parser = argparse.ArgumentParser(
        description="Register departments that report templates can be scoped to.",
    )
    parser.add_argument(
        "--workspace",
        required=True,
        help="Identifier of the workspace that owns the departments",
    )
    parser.add_argument(
        "names",
        nargs="+",
        help="Department names to register",
    )
    return parser.parse_args()


def main() -> None:
    """Register every department given on the command line."""

    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        for name in args.names:
            registered = register_department(
                session, workspace_id=args.workspace, name=name
            )
            print(f"Registered department '{registered}' in workspace {args.workspace}")
    except ValidationError as exc:
        session.rollback()
        raise SystemExit(f"Invalid department: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the department: {exc}") from exc
    finally:
        session.close()


if __name__ == "__main__":
    main()
