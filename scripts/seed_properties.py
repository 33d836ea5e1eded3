from __future__ import annotations

# ruff: noqa: E402

import argparse
import asyncio
import json
import sys
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import cast

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.db.repositories import (
    PropertyImageInsert,
    PropertyInsert,
    delete_all_properties,
    fetch_property_ids_by_code,
    insert_property_images,
    upsert_properties,
)
from src.db.session import dispose_engine, session_context
from src.models.identifiers import new_object_id

_OWNER_NAMES = (
    "Inmobiliaria Andes",
    "Maria Perez",
    "Grupo Habitat",
    "Carlos Lopez",
)

# (owner index, name, address, price, code, year, enabled images, disabled images)
_SEED_CATALOG: tuple[tuple[int, str, str, str, str, int, tuple[str, ...], tuple[str, ...]], ...] = (
    (0, "Casa Norte", "Calle 10 # 5-20", "350000", "P-0001", 2015,
     ("https://picsum.photos/id/10/800/600",), ()),
    (0, "Apartamento Centro", "Cra 7 # 45-21", "420000", "P-0002", 2018,
     ("https://picsum.photos/id/100/800/600",), ()),
    (1, "Estudio Chapinero", "Cl 54 # 9-12", "180000", "P-0003", 2012,
     ("https://picsum.photos/id/103/800/600",), ("https://picsum.photos/id/104/800/600",)),
    (2, "Casa Campestre", "Vereda El Retiro", "560000", "P-0004", 2021,
     ("https://picsum.photos/id/1056/800/600",), ()),
    (2, "Loft Zona T", "Cl 82 # 13-20", "230000", "P-0005", 2016,
     ("https://picsum.photos/id/1069/800/600",), ()),
    (0, "Duplex Salitre", "Av 68 # 24-80", "310000", "P-0006", 2014,
     ("https://picsum.photos/id/1080/800/600",), ()),
    (3, "Penthouse Chico", "Cl 93 # 11-45", "790000", "P-0007", 2023,
     ("https://picsum.photos/id/1084/800/600",), ()),
    (0, "Oficina Pequena", "Cl 72 # 10-12", "145000", "P-0008", 2010,
     ("https://picsum.photos/id/109/800/600",), ()),
    (1, "Casa Suba", "Cl 139 # 95-20", "270000", "P-0009", 2013,
     ("https://picsum.photos/id/110/800/600",), ()),
    (2, "Apto Cedritos", "Cl 140 # 19-40", "380000", "P-0010", 2019,
     ("https://picsum.photos/id/111/800/600",), ()),
    (3, "Casa Usaquen", "Cra 7 # 119-30", "500000", "P-0011", 2017,
     ("https://picsum.photos/id/112/800/600",), ()),
    (3, "Apto Belen", "Cl 30 # 74-10, Medellin", "210000", "P-0012", 2011,
     (), ("https://picsum.photos/id/113/800/600",)),
)


@dataclass(frozen=True)
class CliArgs:
    reset: bool


def _parse_args() -> CliArgs:
    parser = argparse.ArgumentParser(
        description="Seed the property catalog with sample listings and images."
    )
    _ = parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete every property and image row before seeding.",
    )
    namespace = parser.parse_args()
    return CliArgs(reset=cast(bool, namespace.reset))


def _build_seed_rows(
    now: datetime,
) -> tuple[list[PropertyInsert], dict[str, tuple[tuple[str, ...], tuple[str, ...]]]]:
    owner_ids = [new_object_id() for _ in _OWNER_NAMES]
    rows: list[PropertyInsert] = []
    images_by_code: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {}

    for offset, (owner, name, address, price, code, year, enabled, disabled) in enumerate(
        _SEED_CATALOG
    ):
        created_at = now - timedelta(days=len(_SEED_CATALOG) - offset)
        rows.append(
            PropertyInsert(
                owner_id=owner_ids[owner],
                name=name,
                address=address,
                price=Decimal(price),
                code_internal=code,
                year=year,
                created_at=created_at,
                updated_at=created_at,
            )
        )
        images_by_code[code] = (enabled, disabled)

    return rows, images_by_code


async def _run(args: CliArgs) -> dict[str, object]:
    now = datetime.now(UTC)
    rows, images_by_code = _build_seed_rows(now)

    async with session_context() as session:
        deleted = await delete_all_properties(session) if args.reset else 0
        inserted = await upsert_properties(session, rows)

        stored_ids = await fetch_property_ids_by_code(
            session, [row.code_internal for row in rows]
        )
        # images are only attached to rows created by this run
        fresh_ids = {row.code_internal: row.id for row in rows}
        image_rows: list[PropertyImageInsert] = []
        for code, property_id in stored_ids.items():
            if fresh_ids.get(code) != property_id:
                continue
            enabled, disabled = images_by_code[code]
            image_rows.extend(
                PropertyImageInsert(property_id=property_id, file=file, enabled=True)
                for file in enabled
            )
            image_rows.extend(
                PropertyImageInsert(property_id=property_id, file=file, enabled=False)
                for file in disabled
            )
        images_inserted = await insert_property_images(session, image_rows)

    return {
        "status": "success",
        "executed_at": now.isoformat(),
        "reset": args.reset,
        "deleted_properties": deleted,
        "expected_seed_rows": len(rows),
        "inserted_properties": inserted,
        "inserted_images": images_inserted,
    }


async def _async_main() -> int:
    args = _parse_args()
    try:
        report = await _run(args)
    except Exception as exc:  # noqa: BLE001
        error_report = {
            "status": "failure",
            "executed_at": datetime.now(UTC).isoformat(),
            "error": str(exc),
        }
        print(json.dumps(error_report, ensure_ascii=False, indent=2))
        return 1
    finally:
        await dispose_engine()

    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    raise SystemExit(asyncio.run(_async_main()))


if __name__ == "__main__":
    main()
