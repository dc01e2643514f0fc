#!/usr/bin/env python3
"""
One-off migration: JSON data file -> SQL key/value table.

Uso:
  python scripts/migrate_storage.py [--data-file ~/.frontdesk/data.json] [--key visitor-management-data]
"""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

# Garantir que o pacote frontdesk seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frontdesk.core.config import get_settings
from frontdesk.domain.visitors import ROSTER_STORAGE_KEY, RosterFormatError, roster_from_json
from frontdesk.repositories.base import KeyValueStorage
from frontdesk.repositories.json_storage import JsonFileStorage


def migrate(source: JsonFileStorage, target: KeyValueStorage, keys: list[str] | None = None) -> list[str]:
    """Copy stored values from source to target and return the keys copied."""
    copied = []
    for key in source.keys() if keys is None else keys:
        value = source.load(key)
        if value is None:
            continue
        if key == ROSTER_STORAGE_KEY:
            try:
                roster_from_json(value)
            except RosterFormatError as exc:
                raise SystemExit(f"Roster em {key!r} invalido, migracao abortada: {exc}") from exc
        target.save(key, value)
        copied.append(key)
    return copied


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Migrar dados do arquivo JSON para o banco SQL")
    ap.add_argument("--data-file", default=str(settings.data_file), help="Arquivo JSON de origem")
    ap.add_argument("--key", action="append", dest="keys", help="Chave a migrar (default: todas)")
    args = ap.parse_args()

    data_file = Path(args.data_file).expanduser()
    if not data_file.exists():
        raise SystemExit(f"Arquivo nao encontrado: {data_file}")

    from frontdesk.repositories.sql_storage import SQLStorage

    copied = migrate(JsonFileStorage(data_file), SQLStorage(), args.keys)
    print(f"OK: {len(copied)} chave(s) migradas para {settings.database_url}")
    for key in copied:
        print(f"  {key}")


if __name__ == "__main__":
    main()
