"""Reconciliation helpers shared by both device variants.

These functions hold the parts of the synchronization protocol that do not
touch the network: validating what the controller sent, seeding a node set
from it and diffing local edits against it.
"""

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from ledmapper.exceptions import ConfigRevisionMismatch, ControllerConfigError, MappingAbsent
from ledmapper.mapping import nodes_from_ledmap, to_ledmap
from ledmapper.models import SUPPORTED_REVISION, ControllerConfig, LedMap, PixelNode

logger = logging.getLogger(__name__)


def parse_controller_config(data: Any, host: str | None = None) -> ControllerConfig:
    """
    Validate a /cfg.json payload.

    The revision is checked first and must be exactly [1, 0]; a missing
    or differently shaped ``rev`` counts as a mismatch.

    Raises:
        ConfigRevisionMismatch: If rev is not the supported revision
        ControllerConfigError: If the rest of the payload has the wrong shape
    """
    if not isinstance(data, dict):
        raise ControllerConfigError(f"expected a JSON object, got {type(data).__name__}", host=host)

    rev = data.get("rev")
    if (
        not isinstance(rev, list)
        or [type(part) for part in rev] != [int, int]
        or tuple(rev) != SUPPORTED_REVISION
    ):
        raise ConfigRevisionMismatch(rev, SUPPORTED_REVISION, host=host)

    try:
        return ControllerConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ()))
        raise ControllerConfigError(f"{field}: {first.get('msg')}", host=host) from e


def parse_ledmap(data: Any, host: str | None = None) -> LedMap:
    """
    Validate a ledmap.json payload.

    Raises:
        MappingAbsent: If the payload is not ``{"map": [...]}`` holding a
            permutation of 0..n-1
    """
    try:
        ledmap = LedMap.model_validate(data)
    except ValidationError as e:
        raise MappingAbsent(f"unexpected ledmap.json shape: {e.errors()[0].get('msg')}", host=host) from e

    if not ledmap.is_permutation():
        raise MappingAbsent("ledmap.json entries are not a permutation of 0..n-1", host=host)
    return ledmap


def seed_nodes(total: int, ledmap: LedMap | None) -> list[PixelNode]:
    """Node set of ``total`` pixels seeded from the known mapping."""
    return nodes_from_ledmap(ledmap, total)


def mapping_differs(nodes: Sequence[PixelNode], known: LedMap | None) -> bool:
    """
    Compare a node set with the known persisted mapping.

    With no known mapping every node set counts as a change, since the
    controller has nothing stored yet.
    """
    if known is None:
        return True
    return to_ledmap(nodes) != known
