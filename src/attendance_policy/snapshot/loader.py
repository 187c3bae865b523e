from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Union

import yaml

from ..core.exceptions import ConfigurationError, ValidationError
from ..shifts.scheduler import ensure_no_overlaps
from .parsers import (
    parse_geofence,
    parse_overtime_policy,
    parse_penalty_policy,
    parse_public_holiday,
    parse_shift,
    parse_shift_assignment,
    parse_work_schedule_policy,
)
from .repository import SnapshotPolicyRepository

logger = logging.getLogger(__name__)

# snapshot section -> (repository field, parser)
_SECTIONS: dict[str, tuple[str, Callable[[Mapping[str, Any]], Any]]] = {
    "work_schedule_policies": ("work_schedule_policies", parse_work_schedule_policy),
    "overtime_policies": ("overtime_policies", parse_overtime_policy),
    "penalty_policies": ("penalty_policies", parse_penalty_policy),
    "shifts": ("shifts", parse_shift),
    "shift_assignments": ("shift_assignments", parse_shift_assignment),
    "holidays": ("holidays", parse_public_holiday),
    "geofences": ("geofences", parse_geofence),
}


def load_snapshot(path: Union[str, Path], tenant_id: str) -> SnapshotPolicyRepository:
    """Read a YAML policy snapshot and keep the records of ``tenant_id``."""
    snapshot_path = Path(path)
    if not snapshot_path.is_file():
        raise ConfigurationError(f"Policy snapshot not found: {snapshot_path}")

    with snapshot_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    logger.info("Loading policy snapshot %s for tenant %s", snapshot_path, tenant_id)
    return parse_snapshot(data, tenant_id)


def parse_snapshot(data: Mapping[str, Any], tenant_id: str) -> SnapshotPolicyRepository:
    if not tenant_id:
        raise ConfigurationError("tenant_id is required")
    if not isinstance(data, Mapping):
        raise ValidationError("Policy snapshot must be a mapping of record lists")

    unknown = set(data) - set(_SECTIONS)
    if unknown:
        logger.warning("Ignoring unknown snapshot sections: %s", ", ".join(sorted(unknown)))

    records: dict[str, tuple] = {}
    for section, (field_name, parser) in _SECTIONS.items():
        docs = data.get(section) or []
        if not isinstance(docs, list):
            raise ValidationError(f"{section} must be a list")

        parsed = []
        skipped = 0
        for index, doc in enumerate(docs):
            if not isinstance(doc, Mapping):
                raise ValidationError(f"{section}[{index}] must be a mapping")
            if doc.get("tenant_id") != tenant_id:
                skipped += 1
                continue
            try:
                parsed.append(parser(doc))
            except ValidationError as exc:
                raise ValidationError(f"{section}[{index}] ({doc.get('id', '?')}): {exc}") from exc

        if skipped:
            logger.debug("Skipped %d %s of other tenants", skipped, section)
        records[field_name] = tuple(parsed)

    ensure_no_overlaps(records["shift_assignments"])

    repository = SnapshotPolicyRepository(**records)
    logger.info("Policy snapshot loaded: %s", repository.counts())
    return repository
