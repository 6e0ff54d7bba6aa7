"""
Structural validation of timeline frame sequences.

Each check returns a dictionary of issue categories mapped to messages, with
empty categories removed. Category names contain ``errors`` or ``warnings``
so `get_validation_summary` can count them by severity:

- order_errors: negative or non-increasing frame indices
- identity_errors: one instance id used with two different assets
- mask_errors / mask_warnings: ill-formed or dangling mask commands
- asset_errors: commands referencing assets the library lacks
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Hashable, List, Sequence

from .enums import CommandType
from .model import Frame

if TYPE_CHECKING:
    from .library import Library


def validate_frame_order(frames: Sequence[Frame]) -> Dict[str, List[str]]:
    """Frames must be 0-based and strictly increasing."""
    issues = {"order_errors": []}

    previous = None
    for frame in frames:
        if frame.frame < 0:
            issues["order_errors"].append(f"Frame index {frame.frame} is negative")
        if previous is not None and frame.frame <= previous:
            issues["order_errors"].append(
                f"Frame {frame.frame} follows frame {previous} - frames must be strictly increasing"
            )
        previous = frame.frame

    return {k: v for k, v in issues.items() if v}


def validate_instance_assets(frames: Sequence[Frame]) -> Dict[str, List[str]]:
    """An instance id must always refer to the same asset."""
    issues = {"identity_errors": []}

    assets_by_instance: Dict[Hashable, Hashable] = {}
    for frame in frames:
        for command in frame.commands:
            known = assets_by_instance.setdefault(command.instance_id, command.asset_id)
            if known != command.asset_id:
                issues["identity_errors"].append(
                    f"Instance '{command.instance_id}' references asset '{command.asset_id}' "
                    f"at frame {frame.frame} but was created from asset '{known}'"
                )

    return {k: v for k, v in issues.items() if v}


def validate_mask_commands(frames: Sequence[Frame]) -> Dict[str, List[str]]:
    """
    Check mask commands against the instances seen so far in walk order.

    A mask whose target never appears on the timeline is dropped by the
    container, so it is reported as a warning. Removing an instance that was
    never placed is harmless but suspicious.
    """
    issues = {"mask_errors": [], "mask_warnings": []}

    known = {command.instance_id for frame in frames for command in frame.commands}
    seen = set()
    for frame in frames:
        for command in frame.commands:
            if command.type == CommandType.MASK:
                if command.mask_instance_id is None:
                    issues["mask_errors"].append(
                        f"Mask command for instance '{command.instance_id}' at frame {frame.frame} "
                        f"has no mask target"
                    )
                elif command.mask_instance_id not in known:
                    issues["mask_warnings"].append(
                        f"Instance '{command.instance_id}' masks instance "
                        f"'{command.mask_instance_id}' at frame {frame.frame}, "
                        f"which never appears on the timeline"
                    )
            elif command.type == CommandType.REMOVE and command.instance_id not in seen:
                issues["mask_warnings"].append(
                    f"Instance '{command.instance_id}' is removed at frame {frame.frame} "
                    f"before being placed"
                )
            seen.add(command.instance_id)

    return {k: v for k, v in issues.items() if v}


def validate_asset_references(frames: Sequence[Frame], library: "Library") -> Dict[str, List[str]]:
    """Every referenced asset must be registered in `library`."""
    issues = {"asset_errors": []}

    missing = []
    for frame in frames:
        for command in frame.commands:
            if command.asset_id not in library.assets and command.asset_id not in missing:
                missing.append(command.asset_id)
                issues["asset_errors"].append(
                    f"Asset '{command.asset_id}' referenced by instance '{command.instance_id}' "
                    f"at frame {frame.frame} is not in the library"
                )

    return {k: v for k, v in issues.items() if v}


def validate_all(frames: Sequence[Frame], library: "Library" | None = None) -> Dict[str, Dict[str, List[str]]]:
    """
    Run every check on a frame sequence.

    Args:
        frames: Timeline frames in authored order
        library: When given, asset references are checked too

    Returns:
        Dictionary organized by validation category, each containing issues
    """
    validation_results = {}

    order_issues = validate_frame_order(frames)
    if order_issues:
        validation_results["frame_order"] = order_issues

    identity_issues = validate_instance_assets(frames)
    if identity_issues:
        validation_results["instance_identity"] = identity_issues

    mask_issues = validate_mask_commands(frames)
    if mask_issues:
        validation_results["masks"] = mask_issues

    if library is not None:
        asset_issues = validate_asset_references(frames, library)
        if asset_issues:
            validation_results["assets"] = asset_issues

    return validation_results


def get_validation_summary(validation_results: Dict[str, Dict[str, List[str]]]) -> Dict[str, int]:
    """Count issues by severity across all categories."""
    summary = {
        "total_issues": 0,
        "errors": 0,
        "warnings": 0,
        "categories_with_issues": 0,
    }

    for _, issues in validation_results.items():
        category_issue_count = 0
        for issue_type, issue_list in issues.items():
            issue_count = len(issue_list)
            category_issue_count += issue_count

            if "error" in issue_type:
                summary["errors"] += issue_count
            elif "warning" in issue_type:
                summary["warnings"] += issue_count

        if category_issue_count > 0:
            summary["categories_with_issues"] += 1
            summary["total_issues"] += category_issue_count

    return summary


def is_valid(frames: Sequence[Frame], library: "Library" | None = None) -> bool:
    """True when validation reports no errors; warnings are allowed."""
    results = validate_all(frames, library)
    return get_validation_summary(results)["errors"] == 0
