"""Summarizers that derive the state of an object from its fields and conditions."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from kubewrangle.kv import rsplit
from kubewrangle.summary.coretypes import (
    check_cattle_ready,
    check_cattle_types,
    check_has_pod_selector,
    check_has_pod_template,
    check_pod,
)
from kubewrangle.summary.model import (
    Condition,
    Relationship,
    Summarizer,
    Summary,
    dedup_messages,
    get_unstructured_conditions,
    nested_map,
    nested_slice,
    nested_string,
    nested_value,
)

KIND_SEP = ", Kind="
REASON = "%REASON%"

# True is fine, False is an error, Unknown is transitioning.
TRANSITIONING_UNKNOWN: dict[str, str] = {
    "Active": "activating",
    "AddonDeploy": "provisioning",
    "AgentDeployed": "provisioning",
    "BackingNamespaceCreated": "configuring",
    "Built": "building",
    "CertsGenerated": "provisioning",
    "ConfigOK": "configuring",
    "Created": "creating",
    "CreatorMadeOwner": "configuring",
    "DefaultNamespaceAssigned": "configuring",
    "DefaultNetworkPolicyCreated": "configuring",
    "DefaultProjectCreated": "configuring",
    "DockerProvisioned": "provisioning",
    "Deployed": "deploying",
    "Drained": "draining",
    "Downloaded": "downloading",
    "etcd": "provisioning",
    "Inactive": "deactivating",
    "Initialized": "initializing",
    "Installed": "installing",
    "NodesCreated": "provisioning",
    "Pending": "pending",
    "PodScheduled": "scheduling",
    "Provisioned": "provisioning",
    "Reconciled": "reconciling",
    "Refreshed": "refreshed",
    "Registered": "registering",
    "Removed": "removing",
    "Saved": "saving",
    "Updated": "updating",
    "Updating": "updating",
    "Upgraded": "upgrading",
    "Waiting": "waiting",
    "InitialRolesPopulated": "activating",
    "ScalingActive": "pending",
    "AbleToScale": "pending",
    "RunCompleted": "running",
    "Processed": "processed",
}

# True is an error.
ERROR_TRUE: frozenset[str] = frozenset(
    {
        "OutOfDisk",
        "MemoryPressure",
        "DiskPressure",
        "NetworkUnavailable",
        "KernelHasNoDeadlock",
        "Unschedulable",
        "ReplicaFailure",
        "Stalled",
    }
)

# False is an error.
ERROR_FALSE: frozenset[str] = frozenset({"Failed"})

# False is transitioning, Unknown is an error.
TRANSITIONING_FALSE: dict[str, str] = {
    "Completed": "activating",
    "Ready": "unavailable",
    "Available": "updating",
    "BootstrapReady": REASON,
    "InfrastructureReady": REASON,
    "NodeHealthy": REASON,
}

# True is transitioning, Unknown is an error.
TRANSITIONING_TRUE: dict[str, str] = {
    "Reconciling": "reconciling",
}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _string_slice(obj: Any, *names: str) -> list[str]:
    value = nested_value(obj, *names)
    if not isinstance(value, (list, tuple)):
        return []
    return [item if isinstance(item, str) else str(item) for item in value]


def _to_timestamp(value: str) -> Optional[datetime]:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.replace(microsecond=0)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def check_owner(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    for owner in nested_slice(obj, "metadata", "ownerReferences"):
        summary.relationships.append(
            Relationship(
                name=nested_string(owner, "name"),
                kind=nested_string(owner, "kind"),
                api_version=nested_string(owner, "apiVersion"),
                type="owner",
                inbound=True,
                controlled_by=owner.get("controller") is True,
            )
        )
    return summary


def check_status_summary(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    summary_obj = nested_map(obj, "status", "display")
    if not summary_obj:
        summary_obj = nested_map(obj, "status", "summary")
        if not summary_obj:
            return summary

    if "state" in summary_obj:
        summary.state = nested_string(summary_obj, "state")
    if "transitioning" in summary_obj:
        summary.transitioning = _to_bool(summary_obj["transitioning"])
    if "error" in summary_obj:
        summary.error = _to_bool(summary_obj["error"])
    if "message" in summary_obj:
        summary.message.append(nested_string(summary_obj, "message"))
    return summary


def check_errors(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    for c in conditions:
        if (c.type() in ERROR_FALSE and c.status() == "False") or c.reason() == "Error":
            summary.error = True
            summary.message.append(c.message())
            if summary.state in ("active", ""):
                summary.state = "error"
            break

    if summary.error:
        return summary

    for c in conditions:
        if c.type() in ERROR_TRUE and c.status() == "True":
            summary.error = True
            summary.message.append(c.message())
    return summary


def check_transitioning(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    for c in conditions:
        new_state = TRANSITIONING_UNKNOWN.get(c.type())
        if new_state is None:
            continue
        if c.status() == "False":
            summary.error = True
            summary.state = new_state
            summary.message.append(c.message())
        elif c.status() == "Unknown" and summary.state == "":
            summary.transitioning = True
            summary.state = new_state
            summary.message.append(c.message())

    for c in conditions:
        if summary.state:
            break
        new_state = TRANSITIONING_TRUE.get(c.type())
        if new_state is None:
            continue
        if c.status() == "True":
            summary.transitioning = True
            summary.state = new_state
            summary.message.append(c.message())

    ready = True
    ready_message = ""
    for c in conditions:
        if summary.state:
            break
        if c.type() == "Ready" and c.status() == "False":
            ready = False
            ready_message = c.message()
            continue
        new_state = TRANSITIONING_FALSE.get(c.type())
        if new_state is None:
            continue
        if new_state == REASON:
            new_state = c.reason()
        if c.status() == "False":
            summary.transitioning = True
            summary.state = new_state
            summary.message.append(c.message())
        elif c.status() == "Unknown":
            summary.error = True
            summary.state = new_state
            summary.message.append(c.message())

    if summary.state == "" and not ready:
        summary.transitioning = True
        summary.state = "unavailable"
        summary.message.append(ready_message)

    return summary


def check_active(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    if summary.state:
        return summary
    active = nested_string(obj, "spec", "active")
    if active == "true":
        summary.state = "active"
    elif active == "false":
        summary.state = "inactive"
    return summary


def check_phase(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    phase = nested_string(obj, "status", "phase")
    if phase == "Succeeded":
        summary.state = "succeeded"
        summary.transitioning = False
    elif phase == "Bound":
        summary.state = "bound"
        summary.transitioning = False
    elif phase and summary.state == "":
        summary.state = phase
    return summary


def check_initializing(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    api_version = nested_string(obj, "apiVersion")
    status = nested_map(obj, "status") or {}
    has_conditions = "conditions" in status
    if (
        summary.state == ""
        and has_conditions
        and not conditions
        and "cattle.io" in api_version
    ):
        created = _to_timestamp(nested_string(obj, "metadata", "created"))
        if created is not None and created + timedelta(seconds=5) > _now():
            summary.state = "initializing"
            summary.transitioning = True
    return summary


def check_removing(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    removed = nested_string(obj, "metadata", "removed")
    if not removed:
        return summary

    summary.state = "removing"
    summary.transitioning = True

    finalizers = _string_slice(obj, "metadata", "finalizers")
    if not finalizers:
        finalizers = _string_slice(obj, "spec", "finalizers")

    for cond in conditions:
        if (
            cond.type() == "Removed"
            and cond.status() in ("Unknown", "False")
            and cond.message()
        ):
            summary.message.append(cond.message())

    if not finalizers:
        return summary

    _, finalizer = rsplit(finalizers[0], "controller.cattle.io/")
    if finalizer == "foregroundDeletion":
        finalizer = "object cleanup"

    summary.message.append("waiting on " + finalizer)
    removed_at = _to_timestamp(removed)
    if removed_at is not None and removed_at + timedelta(minutes=5) < _now():
        summary.error = True
    return summary


def check_load_balancer(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    if (
        summary.state in ("active", "")
        and nested_string(obj, "kind") == "Service"
        and (
            nested_string(obj, "spec", "serviceKind") == "LoadBalancer"
            or nested_string(obj, "spec", "type") == "LoadBalancer"
        )
    ):
        if not nested_slice(obj, "status", "loadBalancer", "ingress"):
            summary.state = "pending"
            summary.transitioning = True
            summary.message.append("Load balancer is being provisioned")
    return summary


def check_apply_owned(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    if nested_slice(obj, "metadata", "ownerReferences"):
        return summary

    annotations = nested_map(obj, "metadata", "annotations") or {}
    gvk_string = nested_string(annotations, "objectset.rio.cattle.io/owner-gvk")
    i = gvk_string.find(KIND_SEP)
    if i <= 0:
        return summary

    summary.relationships.append(
        Relationship(
            name=nested_string(annotations, "objectset.rio.cattle.io/owner-name"),
            namespace=nested_string(annotations, "objectset.rio.cattle.io/owner-namespace"),
            kind=gvk_string[i + len(KIND_SEP):],
            api_version=gvk_string[:i],
            type="applies",
            inbound=True,
        )
    )
    return summary


CONDITION_SUMMARIZERS: list[Summarizer] = [
    check_errors,
    check_transitioning,
    check_removing,
    check_cattle_ready,
]

SUMMARIZERS: list[Summarizer] = [
    check_status_summary,
    check_errors,
    check_transitioning,
    check_active,
    check_phase,
    check_initializing,
    check_removing,
    check_load_balancer,
    check_pod,
    check_has_pod_selector,
    check_has_pod_template,
    check_owner,
    check_apply_owned,
    check_cattle_types,
]


def summarize(obj: Any) -> Summary:
    """Compute the summary of an unstructured object."""
    if obj is None:
        obj = {}
    if not isinstance(obj, Mapping):
        return Summary()

    conditions = get_unstructured_conditions(obj)
    summary = Summary()
    for summarizer in SUMMARIZERS:
        summary = summarizer(obj, conditions, summary)

    if not summary.state:
        summary.state = "active"
    summary.state = summary.state.lower()
    summary.message = dedup_messages(summary.message)
    return summary


def normalize_conditions(obj: Any) -> None:
    """Annotate each status condition of ``obj`` in place with error and transitioning flags."""
    if not isinstance(obj, dict):
        return

    new_conditions: list[dict] = []
    for condition in nested_slice(obj, "status", "conditions"):
        summary = Summary()
        for summarizer in CONDITION_SUMMARIZERS:
            summary = summarizer(obj, [Condition(condition)], summary)
        condition["error"] = summary.error
        condition["transitioning"] = summary.transitioning
        if nested_string(condition, "lastUpdateTime") == "":
            condition["lastUpdateTime"] = nested_string(condition, "lastTransitionTime")
        new_conditions.append(condition)

    if new_conditions:
        status = obj.get("status")
        if not isinstance(status, dict):
            status = {}
            obj["status"] = status
        status["conditions"] = new_conditions