from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from patient_intake.domain.constants import SectionKey
from patient_intake.domain.models.registration import SECTION_ATTRIBUTES, RegistrationRecord, freeze_section


def merge_section(
    record: RegistrationRecord,
    section_key: SectionKey | str,
    normalized: Mapping[str, Any],
) -> RegistrationRecord:
    """Return a copy of ``record`` with one section replaced wholesale.

    The new section is a read-only copy of ``normalized``; other sections are
    carried over as the very same objects.
    """
    attribute = SECTION_ATTRIBUTES[SectionKey(section_key)]
    return replace(record, **{attribute: freeze_section(normalized)})


def changed_paths(before: Mapping[str, Any], after: Mapping[str, Any]) -> list[str]:
    paths: list[str] = []
    _walk_diff(before, after, "", paths)
    return paths


def _walk_diff(before: Any, after: Any, path: str, paths: list[str]) -> None:
    if isinstance(before, Mapping) and isinstance(after, Mapping):
        keys = sorted(set(before.keys()) | set(after.keys()))
        for key in keys:
            child_path = f"{path}.{key}" if path else str(key)
            _walk_diff(before.get(key), after.get(key), child_path, paths)
        return
    if before != after:
        paths.append(path)
