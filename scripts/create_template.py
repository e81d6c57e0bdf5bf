"""Utility script to create a hostname template from a JSON definition."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from hns.application.use_cases.templates import NewTemplateGroupData, create_template
from hns.config import get_settings
from hns.domain.errors import HNSError
from hns.infrastructure.database import (
    create_database_engine,
    create_session_factory,
    initialize_database,
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for template creation."""

    parser = argparse.ArgumentParser(
        description="Create a hostname template from a JSON definition file.",
    )
    parser.add_argument(
        "definition",
        type=Path,
        help="JSON file with the template fields and an ordered 'groups' list",
    )
    parser.add_argument(
        "--created-by",
        default="admin",
        help="User recorded as the template author (default: admin)",
    )
    return parser.parse_args()


def main() -> None:
    """Create a template using the provided definition file."""

    args = parse_args()

    try:
        definition = json.loads(args.definition.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Could not read template definition: {exc}") from exc

    groups = [NewTemplateGroupData(**group) for group in definition.pop("groups", [])]

    engine = create_database_engine(get_settings())
    initialize_database(engine)
    session = create_session_factory(engine)()
    try:
        template = create_template(
            session,
            groups=groups,
            created_by=definition.pop("created_by", args.created_by),
            **definition,
        )
    except (HNSError, TypeError) as exc:
        session.rollback()
        raise SystemExit(f"Could not create the template: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error saving the template to the database: {exc}") from exc
    else:
        print(
            "Template created:\n"
            f"  ID: {template.id}\n"
            f"  Name: {template.name}\n"
            f"  Groups: {', '.join(group.name for group in template.ordered_groups())}"
        )
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    main()
