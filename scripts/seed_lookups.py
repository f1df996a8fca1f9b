#!/usr/bin/env python3
"""
Load country and language lookup rows from a JSON file.

Usage:
    python scripts/seed_lookups.py --input scripts/lookups.sample.json --settings appsettings.json

Input shape:
    {"countries": [{"code": "CA", "name": "Canada"}],
     "languages": [{"languageId": "EN", "name": "English", "nativeName": "English"}]}

Rows whose code already exists are skipped; everything else goes through
the business rules before it is written.
"""

import argparse
import json
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from careercloud.config import load_settings
from careercloud.database import init_database
from careercloud.errors import ConfigurationError, ValidationErrors
from careercloud.logic import SystemCountryCodeLogic, SystemLanguageCodeLogic
from careercloud.pocos import SystemCountryCode, SystemLanguageCode
from careercloud.repositories import create_repository
from careercloud.serialization import from_dict

SECTIONS = [
    ("countries", SystemCountryCode, SystemCountryCodeLogic),
    ("languages", SystemLanguageCode, SystemLanguageCodeLogic),
]


def seed(input_path: Path, settings_path: Path = None, dry_run: bool = False) -> bool:
    """
    Insert missing lookup rows.

    Args:
        input_path: JSON file with "countries" and/or "languages" arrays
        settings_path: Settings file (default resolution when None)
        dry_run: If True, only report what would be inserted

    Returns:
        True when every section was written (or would be, for a dry run)
    """
    print(f"Loading lookups from {input_path}...")
    with open(input_path, encoding="utf-8") as f:
        data = json.load(f)

    settings = load_settings(settings_path)
    if not dry_run:
        init_database(settings.connection_string).dispose()

    ok = True
    for section, poco_cls, logic_cls in SECTIONS:
        rows = data.get(section, [])
        if not rows:
            continue
        candidates = [from_dict(poco_cls, row) for row in rows]

        repository = create_repository(poco_cls, settings)
        try:
            logic = logic_cls(repository)
            fresh = [c for c in candidates if logic.get(getattr(c, logic.key_attr)) is None]
            skipped = len(candidates) - len(fresh)

            if dry_run:
                print(f"[DRY RUN] {section}: would insert {len(fresh)}, skip {skipped}")
                for c in fresh[:5]:
                    print(f"  {getattr(c, logic.key_attr)}: {c.name}")
                continue

            if fresh:
                logic.add(fresh)
            print(f"✅ {section}: inserted {len(fresh)}, skipped {skipped}")
        except ValidationErrors as e:
            ok = False
            print(f"❌ {section} rejected:")
            for err in e.errors:
                print(f"   {err.code}: {err.message}")
        finally:
            repository.close()

    return ok


def main():
    parser = argparse.ArgumentParser(description="Seed country and language lookup tables")
    parser.add_argument("--input", type=Path, default=Path("scripts/lookups.sample.json"),
                       help="Path to lookups JSON file")
    parser.add_argument("--settings", type=Path, default=None,
                       help="Path to settings JSON (default: $CAREERCLOUD_SETTINGS or ./appsettings.json)")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be inserted without writing")

    args = parser.parse_args()

    if not args.input.exists():
        print(f"❌ Input file not found: {args.input}")
        sys.exit(1)

    try:
        ok = seed(args.input, args.settings, dry_run=args.dry_run)
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)
    sys.exit(0 if ok else 2)


if __name__ == "__main__":
    main()
