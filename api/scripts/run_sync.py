"""
CLI: Airtable -> Webflow (one-way sync).

Uso recomendado:
  - Ejecutar como job (cron/systemd timer) o a mano para revisar el plan.

Variables de entorno requeridas (backends reales):
  - AIRTABLE_TOKEN
  - AIRTABLE_BASE_ID
  - WEBFLOW_TOKEN
  - WEBFLOW_COLLECTION_ID

Ejecución:
  python scripts/run_sync.py
  python scripts/run_sync.py --dry-run
  python scripts/run_sync.py --json --strict

Códigos de salida:
  0 = corrida completa (puede incluir fallas individuales, ver reporte)
  1 = hubo fallas individuales y se pasó --strict
  2 = la corrida se abortó (fetch/config)
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `classes_sync/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe (api/.env o raíz del repo).
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from classes_sync.api.v1.dependencies.use_case_deps import get_orchestrator_factory
from classes_sync.infrastructure.sync_lock import SyncRunGuard
from classes_sync.shared.exceptions.base import AppException


def _print_plan(preview, as_json: bool) -> None:
    if as_json:
        print(json.dumps({"plan": preview.plan.to_list(), "counts": preview.plan.counts()}, indent=2, default=str))
        return
    print(f"Records: {preview.source_count}  Items: {preview.target_count}  {preview.plan!r}")
    for op in preview.plan:
        print(f"  - {op.describe()}")


def _print_report(report, as_json: bool) -> None:
    if as_json:
        print(json.dumps({"report": report.to_dict()}, indent=2, default=str))
        return
    print(f"Reporte: {report.summary()}")
    for failure in report.failures:
        print(f"  ! {failure.operation.describe()}: {failure.reason}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sincroniza la tabla de clases de Airtable con Webflow.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Solo calcula e imprime el plan (no escribe en Webflow).",
    )
    parser.add_argument("--json", action="store_true", help="Salida en JSON.")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Salir con código 1 si alguna operación individual falló.",
    )
    args = parser.parse_args(argv)

    build_orchestrator = get_orchestrator_factory()

    try:
        orchestrator = build_orchestrator()
        if args.dry_run:
            _print_plan(orchestrator.plan_only(), args.json)
            return 0

        with SyncRunGuard.hold(orchestrator.config.source_collection):
            report = orchestrator.run()
    except AppException as e:
        logger.error(f"Sync abortado: {e.message}")
        return 2

    _print_report(report, args.json)
    if args.strict and report.has_failures:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
